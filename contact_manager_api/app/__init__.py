"""
Application package.

The service is split into small pieces: ``core`` holds settings,
logging and database wiring, ``schemas`` the request/response models,
``services`` the contact store and ``api`` the HTTP routes.  The
application itself is assembled in ``main.create_app``.
"""
