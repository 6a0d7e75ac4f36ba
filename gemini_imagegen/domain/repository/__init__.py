"""Repository Interfaces"""
