"""
DevConnector Backend: API Schemas
==================================

Pydantic request/response models, one module per resource:
    - user.py:     registration, login, token, current user
    - profile.py:  profile upsert, experience, profile responses
    - post.py:     posts, likes, comments
    - common.py:   error envelope, message, health
"""
