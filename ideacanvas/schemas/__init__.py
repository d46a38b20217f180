# Schemas package init
"""
Idea Canvas Backend — API Schemas
==================================

What:  Pydantic models defining the API contract with the frontend.

Module Inventory:
    - common.py:       base CamelModel, counts, driver results, errors, health
    - blog.py:         blog create/update/like bodies, list envelopes
    - wishlist.py:     wishlist add body and response
    - comment.py:      comment body and response
    - profile.py:      profile upsert/image bodies, profile and stats responses
    - notification.py: mark-all-read response
    - newsletter.py:   subscribe body and response
"""
