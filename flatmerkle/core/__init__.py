"""Tree algebra, errors, configuration and serialization"""
