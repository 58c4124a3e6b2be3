"""Corrections that relate the rotating Earth to the uniform time scales."""
