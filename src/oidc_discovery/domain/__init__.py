"""Domain layer: configuration snapshot, key material and discovery services"""
