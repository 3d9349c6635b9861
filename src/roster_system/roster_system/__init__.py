"""Roster System package.

Duty roster (escala) and overtime tracker, organized by feature modules
(militares, secoes, legendas, escala, hours) with a thin Flask controller
layer over service/repository layers.
"""
