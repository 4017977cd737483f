"""
Rendering side of wikimap.

- surface: The visualization surface the engine draws into
- visualize: Standalone HTML export of a surface
"""
