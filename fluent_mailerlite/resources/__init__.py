"""
Per-resource services, builders and response transforms.
"""
