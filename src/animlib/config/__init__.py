"""Animation engine configuration"""
