"""
ConfigMaster - externalized application configuration served over HTTP
"""
__version__ = "1.0.0"
