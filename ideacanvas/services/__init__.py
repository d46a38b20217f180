# Services package init
"""
Idea Canvas Backend — Services Layer
=====================================

What:  Business logic between routes (HTTP) and MongoDB (persistence).
How:   Each service is a stateless singleton whose methods take the
       database handle injected into the route.

Service Inventory:
    - base.py:                 PyMongoError → DatabaseError translation, UTC clock
    - BlogService:             blogs, like toggle, counts, top/recent, per-author
    - WishlistService:         saved blogs per user
    - CommentService:          comments per blog
    - ProfileService:          profile upserts and activity stats
    - NotificationService:     shared notification feed
    - NewsletterService:       subscriptions (writes a feed notification)
"""
