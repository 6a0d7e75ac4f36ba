"""JSON-RPC stdio surface"""
