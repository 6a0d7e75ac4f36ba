"""Image Providers"""
