"""Core application components.

This module provides the foundational components for the BizHub Access API:
- Supabase client management
- Application settings and configuration
"""
