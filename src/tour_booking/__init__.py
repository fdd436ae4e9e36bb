"""Session gate and booking flow for the tours marketplace client."""
