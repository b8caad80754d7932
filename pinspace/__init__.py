"""
pinspace accounts service.

The accounts service is a Flask application that owns user identity for the
pinspace media-sharing application. It provides JSON endpoints for account
registration, login and logout, and the social graph between users: who
follows whom, how many followers an account has, and whether the person
looking at a profile already follows it.

Sessions
--------
When a user registers or logs in, they are issued a signed JWT in an
HTTP-only cookie. The token binds the user's ID and nothing else; there is
no session table. Any request carrying a valid token is authenticated as
that user until the cookie expires (30 days by default). Rotating
``JWT_SECRET`` invalidates every outstanding session.

Social graph
------------
A follow edge is a directed (follower, following) pair. The datastore holds
at most one edge per ordered pair and never an edge from a user to
themselves. Following and unfollowing share a single toggle endpoint.

Content entities (pins, boards, comments) are handled by other services.
"""
