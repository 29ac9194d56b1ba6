"""Hotel management API"""
