"""Channel integrations"""
