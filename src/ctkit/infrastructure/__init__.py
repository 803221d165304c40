"""Infrastructure layer — persistence adapters for the collaborator interfaces."""
