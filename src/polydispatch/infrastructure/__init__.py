"""Infrastructure layer - registry, composition strategies, logging and singletons."""
