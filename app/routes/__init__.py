"""
Routes Package
Exports all route blueprints
"""
from app.routes.forms import forms_bp
from app.routes.responses import responses_bp
from app.routes.public import public_bp

__all__ = ['forms_bp', 'responses_bp', 'public_bp']
