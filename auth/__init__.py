"""
auth — User authentication module.

Provides:
  • Session token creation & verification (HMAC-SHA256)
  • Password hashing (bcrypt)
  • Login API route
  • ``get_current_user`` FastAPI dependency (the bearer-token gate)
"""
