"""QuickHelp identity-document OCR service.

Accepts uploaded identity-card images, runs Tesseract OCR over them,
and pulls the national identity card number out of the recognized text.
"""
