"""
Orchestration layer: the sequential batch workflow and its write operator.
"""
