"""
Bridge Docs: Quote & Invoice Generator

Packages:
    api/        Editor routes and HTML templates
    forms/      Document layout and PDF rendering
    core/       Documents, access gate, configuration and paths
"""
