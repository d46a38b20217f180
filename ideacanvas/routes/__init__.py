# Routes package init
"""
Idea Canvas Backend — API Routes Package
=========================================

Route Inventory:
    - blogs.py:          /addBlog, /blogs*, /recent*, /blog/{id}*, /likes/count,
                         /user/blogs/{email}
    - wishlist.py:       /wishlist*
    - comments.py:       /comments*
    - profiles.py:       /profile*
    - notifications.py:  /notifications*
    - newsletter.py:     /newsletter_subscribers, /api/subscribe
    - health.py:         /health, /

Routes stay thin: pull data off the request, call one service method,
return its result. Status codes for failures come from the exception
handlers in main.py.
"""
