"""Turns recipe and step-template documents into recipes you can read.

Two documents come over the wire: a list of recipes and a dictionary of
reusable step templates. Steps point at templates by id and at ingredients by
id. Templates have to exist, ingredients only have to exist if you want to see
them.

- `loader` fetches, validates and caches the documents.
- `templates` fills in `{param}` and `{group:name}` placeholders.
- `services` stitches the two together against an ingredient catalog.
- `models` is what comes out the other end.

Nothing here raises at the caller. Bad data means fallback data or a recipe
that is simply not there.
"""
