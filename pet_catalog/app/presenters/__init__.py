"""
Presenters for the two screens: the pet catalog and the pet editor.

Presenters talk to an abstract view object, so any front end can
render them.
"""
