"""Web API for saved tracks and headless races."""
