"""Core business logic layer.

Subpackages:
- fridge: fridge check over the shopping list
- archive: archiving trips and browsing the archive
- recipes: recipe editing
- reporting: spending statistics

navigation holds the route table and the view state passed between screens.
"""
__all__ = ["fridge", "archive", "recipes", "reporting", "navigation"]
