"""Tool Implementations"""
