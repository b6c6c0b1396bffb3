"""Edge and gradient collaborators."""
