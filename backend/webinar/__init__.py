"""
Webinar registration backend.

Serves the registration form, stores every submission as a document in
MongoDB and redirects the visitor to a confirmation page.
"""

__version__ = "0.1.0"
