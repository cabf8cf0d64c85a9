"""Service settings and provider configuration registry"""
