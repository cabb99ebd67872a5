"""
Service layer abstraction.

Each service encapsulates business logic over the consultant
collection and receives the ``Database`` client it works on when it is
constructed.  API handlers only translate HTTP parameters into service
calls; errors are raised as ``core.errors`` exceptions.
"""
