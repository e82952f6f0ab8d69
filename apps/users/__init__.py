"""Users app package.

Holds the marketplace account model with its roles, the capability gate
that decides which actor may trigger which operation, and authentication
of the trusted payment subsystem. Use ``apps.users.models.CustomUser`` as
the AUTH_USER_MODEL throughout the project.
"""
