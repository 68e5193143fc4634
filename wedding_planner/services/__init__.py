"""Guest import services: normalization, preview, commit, session and app state."""
