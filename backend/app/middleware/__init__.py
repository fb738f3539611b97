# Middleware package init
"""
DevConnector Backend - Middleware Package
=========================================

Middleware Chain (request direction):
    Request → [Request ID] → [Logging] → [Rate Limit] → [GZip] → [CORS] → Route Handler

    1. Request ID first: every response, 429s included, carries the ID
    2. Logging: one access line per request with status and duration
    3. Rate Limit: reject abusive clients before any database work
"""
