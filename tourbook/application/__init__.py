"""Capa de aplicación: puertos, servicios y casos de uso."""
