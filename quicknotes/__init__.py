"""Single-user desktop notes with debounced autosave to a local JSON file."""

__version__ = "0.1.0"
