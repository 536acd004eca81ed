"""
Firebase test env tasks package.

Task modules are collected by the package __init__ using Collection.from_module().
"""
