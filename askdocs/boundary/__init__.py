"""
Boundary layer.

Adapters for external collaborators: embedding and chat model providers,
the similarity-search store and its database.
"""
