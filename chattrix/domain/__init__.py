"""Domain layer: entities and the exceptions raised around them."""
