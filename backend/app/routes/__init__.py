# Routes package init
"""
DevConnector Backend - API Routes Package
=========================================

Route Inventory:
    - users.py:    POST   /api/users                         (register)
    - auth.py:     POST   /api/auth                          (login)
                   GET    /api/auth                          (current user)
    - profile.py:  GET    /api/profile/me, /api/profile, /api/profile/user/{user_id}
                   POST   /api/profile                       (create or update)
                   DELETE /api/profile                       (delete account)
                   PUT    /api/profile/experience, /api/profile/education
                   PUT/DELETE /api/profile/experience/{exp_id}, /api/profile/education/{edu_id}
    - posts.py:    POST/GET /api/posts, GET/DELETE /api/posts/{post_id}
                   PUT    /api/posts/like/{post_id}
                   POST   /api/posts/comment/{post_id}
                   DELETE /api/posts/comment/{post_id}/{comment_id}
    - health.py:   GET    /, /health

Routes stay THIN: extract parameters, resolve the caller through the auth
gate, call a service, return its schema. Errors propagate to the global
handlers in main.py.
"""
