"""
Sapling core: schema IR, type resolution and the grammar compiler.
"""
