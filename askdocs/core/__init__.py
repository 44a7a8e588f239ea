"""
Core business logic.

Pure and provider-agnostic pieces of the pipelines: segmentation, retry,
prompt construction and the answer stream protocol.
"""
