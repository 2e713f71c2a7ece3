"""
API Services - request handling logic that does not belong to the core pipeline
"""
