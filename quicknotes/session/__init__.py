from .controller import NoteSession, Phase, SessionState, SessionStatus

__all__ = ["NoteSession", "Phase", "SessionState", "SessionStatus"]
