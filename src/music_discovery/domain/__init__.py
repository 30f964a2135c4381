"""
Domain Layer

Entities, value objects and pure business rules for recommendations and
saved items. Nothing here performs I/O.
"""
