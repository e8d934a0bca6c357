"""Quote and invoice PDF generation.

Key exports:
    build_layout()     Declarative draw instructions for a document
    render_pdf()       Render a document to PDF bytes
    export_document()  Render + filename, with top-level error handling
"""
