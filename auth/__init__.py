"""
auth — User authentication module.

Provides:
  • bcrypt password hashing
  • HS256 token issuing & verification
  • Register / Login API routes
  • Username / email / handle availability checks
"""
