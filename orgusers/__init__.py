"""
orgusers: lifecycle of organization user assignments over a document store
"""
