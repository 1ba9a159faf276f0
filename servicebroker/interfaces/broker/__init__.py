"""
HTTP interface for the Open Service Broker API (/v2).
"""
