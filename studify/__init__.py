"""Studify backend - focus timer and study statistics"""
