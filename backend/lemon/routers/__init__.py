"""Lemon API Routers"""
