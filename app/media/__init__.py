"""
Media app: chat attachment uploads to Cloudinary.

The returned URL is what clients put in FILE_URL messages.
"""
