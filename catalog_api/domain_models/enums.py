# ==============================================================================
# CATALOG ENUMERATIONS
# ==============================================================================
# Value sets shared by the catalog models and request schemas
# ==============================================================================

from __future__ import annotations

import enum


class ProductType(str, enum.Enum):
    """Commercial format of a product."""
    PROGRAMA_LARGO = "Programa largo"
    PROGRAMA_MEDIO = "Programa medio"
    CURSO_CORTO = "Curso corto"
    CURSO_PRESENCIAL = "Curso presencial"
    SUSCRIPCION = "Suscripción"
    LIBRO = "Libro"


class PurchaseType(str, enum.Enum):
    """How a product is sold."""
    COMPRA_DIRECTA = "Compra directa"
    COMPRA_CONSULTIVA = "Compra consultiva"


class SubscriptionType(str, enum.Enum):
    ALUMNI = "Alumni"
    PREMIUM = "Premium"


class SubjectDataType(str, enum.Enum):
    """Where the subject data of a product is maintained."""
    LAAB = "Laab"
    MANUAL = "Manual"
