"""
holds submodules related to finding gene fusions from chimeric alignments
"""
__version__ = '1.0.0'
