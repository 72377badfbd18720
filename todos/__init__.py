"""todos/ -- In-memory TODO item store.

Layer rule: todos/ imports only stdlib. It does NOT import from api/,
auth/, or web/. The store is created by the api/ lifespan and handed to
route handlers through app.state.
"""
