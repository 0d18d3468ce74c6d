"""Authentication and authorization.

Learn: Members log in with email/password and receive a stateless
bearer JWT (7 days). Protected routes resolve that token into a
CurrentIdentity via a FastAPI dependency; ownership checks downstream
compare resource owners against identity.user_id, never against
anything the client sent in the body.
"""
