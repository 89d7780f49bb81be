"""
Service layer.

Services own application state and business rules; API handlers call
into them and translate their exceptions into HTTP responses.
"""
