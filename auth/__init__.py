"""
auth — User authentication module.

Provides:
  • Password hashing (bcrypt)
  • JWT issuance & validation (HS256)
  • Register / Login orchestration and API routes
  • ``get_current_user_id`` FastAPI dependency
"""
