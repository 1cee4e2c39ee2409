"""Input models for profile rows, media rows and program metadata."""
