"""
MyHome single-page client: hash router, auth guard, shell and views.
"""
