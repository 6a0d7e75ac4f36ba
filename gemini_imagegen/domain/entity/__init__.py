"""Domain Entities"""
