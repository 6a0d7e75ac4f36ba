"""Storage Infrastructure"""
