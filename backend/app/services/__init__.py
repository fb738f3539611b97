# Services package init
"""
DevConnector Backend - Services Layer
=====================================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Services load an aggregate through the request session, hand it to the
       mutation engine, and commit the result.

Service Inventory:
    - mutations:       Pure add/replace/remove rules for profile and post sub-entities
    - AuthService:     Registration, login, user lookup
    - ProfileService:  Profile reads, upsert, account deletion, experience/education
    - PostService:     Posts, likes, comments
"""
