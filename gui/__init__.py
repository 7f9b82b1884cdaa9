"""Tkinter front-end for the User Management client.

``gui.state``, ``gui.controller`` and ``gui.presenter`` do not import tkinter
and can be used headless; only ``gui.app``, ``gui.views`` and
``gui.components`` need a Tk installation.
"""
