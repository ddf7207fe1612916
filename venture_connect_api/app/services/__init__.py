"""
Service layer abstraction.

Each service encapsulates the business logic for a domain and works
against whichever ``Store`` it is given, so API handlers never touch
storage directly.  Services return public schemas: user records leave
this layer without their password hash.
"""
