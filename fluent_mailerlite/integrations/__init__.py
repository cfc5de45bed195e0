"""
Transport-level integrations (the MailerLite HTTP API).
"""
