"""HTML card building and PNG rendering."""
