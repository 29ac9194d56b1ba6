"""Admin edge functions"""
