"""Conan version grammar, ordering, models, and resolution."""
