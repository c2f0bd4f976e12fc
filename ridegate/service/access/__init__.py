"""
The access layer is a thin set of functions over the models, used by the
managers and views to read and write the relational store.
"""
