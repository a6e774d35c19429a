# app/__init__.py
"""
Messagely: usuarios registrados que se mandan mensajes de texto.

    app.core      configuración, hashing, tokens, autenticación, política
    app.db        engine / sesiones async
    app.users     registro, login, perfiles
    app.messages  mensajes
"""
