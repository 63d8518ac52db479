"""Domain layer: repository contracts shared by every store implementation."""
