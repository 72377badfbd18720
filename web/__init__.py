"""web/ -- Static serving of the built browser frontend."""
