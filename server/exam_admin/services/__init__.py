"""
Services package: store-facing operations used by the routers.
"""
