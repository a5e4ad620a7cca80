"""Localized message catalog for problem documents and validation errors.

Messages are flat ``key -> template`` maps, one per language.  Templates use
``str.format`` named placeholders.  Lookups fall back to the configured
default language, then to the key itself.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.conf import settings
from django.http import HttpRequest
from django.utils import translation

logger = structlog.get_logger(__name__)

_EN_US: Dict[str, str] = {
    # Problem titles / details
    "error.title.validation": "Validation Error",
    "validation.error.detail": "One or more fields failed validation.",
    "error.title.product.not.found": "Product Not Found",
    "product.not.found.detail": "No product exists with public ID '{product_id}'.",
    "error.title.product.already.exists": "Product Already Exists",
    "product.already.exists.detail": "A product named '{product_name}' already exists.",
    "error.title.parsing.error": "Malformed Request Body",
    "parsing.error.detail": "The request body could not be parsed.",
    "error.title.type.mismatch": "Type Mismatch",
    "type.mismatch.detail": "One or more parameters have an invalid type.",
    "type.mismatch.field.message": "Parameter '{field}' must be a valid {expected}.",
    "error.title.invalid.argument": "Invalid Argument",
    "illegal.argument.detail": "One or more request parameters are invalid.",
    "error.title.database.constraint.violation": "Data Integrity Violation",
    "database.constraint.violation.detail": "The operation violates a data integrity constraint.",
    "error.title.internal.server.error": "Internal Server Error",
    "internal.server.error.detail": "An unexpected error occurred. Please try again later.",
    "error.title.request": "Request Error",
    # Product request fields
    "validation.name.required": "Name is required.",
    "validation.name.invalid": "Name must be text.",
    "validation.name.size": "Name must be between {min} and {max} characters.",
    "validation.price.required": "Price is required.",
    "validation.price.invalid": "Price must be a valid number.",
    "validation.price.min": "Price must be at least {min}.",
    "validation.price.max": "Price must be at most {max}.",
    "validation.price.scale": "Price must have at most {scale} decimal places.",
    "validation.description.invalid": "Description must be text.",
    "validation.description.size": "Description must be at most {max} characters.",
    "validation.quantity.required": "Quantity is required.",
    "validation.quantity.invalid": "Quantity must be a whole number.",
    "validation.quantity.min": "Quantity must be at least {min}.",
    "validation.quantity.max": "Quantity must be at most {max}.",
    # Cross-field business rules
    "validation.business.low.value": (
        "Low-value products (price < {threshold}) cannot have quantity greater than {limit}."
    ),
    "validation.business.high.value": (
        "High-value products (price > {threshold}) must have quantity less than or equal to {limit}."
    ),
    # Product query
    "productquery.name.size": "Name filter must be between {min} and {max} characters.",
    "productquery.price.min": "Price filter must be at least {min}.",
    "productquery.price.max": "Price filter must be at most {max}.",
    "productquery.quantity.min": "Quantity filter must be at least {min}.",
    "productquery.quantity.max": "Quantity filter must be at most {max}.",
    "productquery.price.range.invalid": "Maximum price must be greater than or equal to minimum price.",
    "productquery.quantity.range.invalid": (
        "Maximum quantity must be greater than or equal to minimum quantity."
    ),
    # Pagination
    "pagination.page.invalid": "Page index must be a non-negative integer.",
    "pagination.size.invalid": "Page size must be an integer between 1 and {max}.",
    "pagination.sort.invalid": "Cannot sort by '{value}'. Allowed properties: {allowed}.",
    "pagination.direction.invalid": "Sort direction '{value}' must be 'asc' or 'desc'.",
    # Request body
    "request.body.object": "The request body must be a JSON object.",
}

_PT_BR: Dict[str, str] = {
    "error.title.validation": "Erro de Validação",
    "validation.error.detail": "Um ou mais campos falharam na validação.",
    "error.title.product.not.found": "Produto Não Encontrado",
    "product.not.found.detail": "Nenhum produto existe com o ID público '{product_id}'.",
    "error.title.product.already.exists": "Produto Já Existe",
    "product.already.exists.detail": "Já existe um produto com o nome '{product_name}'.",
    "error.title.parsing.error": "Corpo da Requisição Inválido",
    "parsing.error.detail": "Não foi possível interpretar o corpo da requisição.",
    "error.title.type.mismatch": "Tipo Incompatível",
    "type.mismatch.detail": "Um ou mais parâmetros possuem tipo inválido.",
    "type.mismatch.field.message": "O parâmetro '{field}' deve ser um {expected} válido.",
    "error.title.invalid.argument": "Argumento Inválido",
    "illegal.argument.detail": "Um ou mais parâmetros da requisição são inválidos.",
    "error.title.database.constraint.violation": "Violação de Integridade",
    "database.constraint.violation.detail": "A operação viola uma restrição de integridade dos dados.",
    "error.title.internal.server.error": "Erro Interno do Servidor",
    "internal.server.error.detail": "Ocorreu um erro inesperado. Tente novamente mais tarde.",
    "error.title.request": "Erro na Requisição",
    "validation.name.required": "O nome é obrigatório.",
    "validation.name.invalid": "O nome deve ser um texto.",
    "validation.name.size": "O nome deve ter entre {min} e {max} caracteres.",
    "validation.price.required": "O preço é obrigatório.",
    "validation.price.invalid": "O preço deve ser um número válido.",
    "validation.price.min": "O preço deve ser no mínimo {min}.",
    "validation.price.max": "O preço deve ser no máximo {max}.",
    "validation.price.scale": "O preço deve ter no máximo {scale} casas decimais.",
    "validation.description.invalid": "A descrição deve ser um texto.",
    "validation.description.size": "A descrição deve ter no máximo {max} caracteres.",
    "validation.quantity.required": "A quantidade é obrigatória.",
    "validation.quantity.invalid": "A quantidade deve ser um número inteiro.",
    "validation.quantity.min": "A quantidade deve ser no mínimo {min}.",
    "validation.quantity.max": "A quantidade deve ser no máximo {max}.",
    "validation.business.low.value": (
        "Produtos de baixo valor (preço < {threshold}) não podem ter quantidade maior que {limit}."
    ),
    "validation.business.high.value": (
        "Produtos de alto valor (preço > {threshold}) devem ter quantidade menor ou igual a {limit}."
    ),
    "productquery.name.size": "O filtro de nome deve ter entre {min} e {max} caracteres.",
    "productquery.price.min": "O filtro de preço deve ser no mínimo {min}.",
    "productquery.price.max": "O filtro de preço deve ser no máximo {max}.",
    "productquery.quantity.min": "O filtro de quantidade deve ser no mínimo {min}.",
    "productquery.quantity.max": "O filtro de quantidade deve ser no máximo {max}.",
    "productquery.price.range.invalid": "O preço máximo deve ser maior ou igual ao preço mínimo.",
    "productquery.quantity.range.invalid": (
        "A quantidade máxima deve ser maior ou igual à quantidade mínima."
    ),
    "pagination.page.invalid": "O índice da página deve ser um inteiro não negativo.",
    "pagination.size.invalid": "O tamanho da página deve ser um inteiro entre 1 e {max}.",
    "pagination.sort.invalid": "Não é possível ordenar por '{value}'. Propriedades permitidas: {allowed}.",
    "pagination.direction.invalid": "A direção de ordenação '{value}' deve ser 'asc' ou 'desc'.",
    "request.body.object": "O corpo da requisição deve ser um objeto JSON.",
}

_ES_ES: Dict[str, str] = {
    "error.title.validation": "Error de Validación",
    "validation.error.detail": "Uno o más campos no superaron la validación.",
    "error.title.product.not.found": "Producto No Encontrado",
    "product.not.found.detail": "No existe ningún producto con el ID público '{product_id}'.",
    "error.title.product.already.exists": "El Producto Ya Existe",
    "product.already.exists.detail": "Ya existe un producto con el nombre '{product_name}'.",
    "error.title.parsing.error": "Cuerpo de Solicitud Inválido",
    "parsing.error.detail": "No se pudo interpretar el cuerpo de la solicitud.",
    "error.title.type.mismatch": "Tipo Incompatible",
    "type.mismatch.detail": "Uno o más parámetros tienen un tipo inválido.",
    "type.mismatch.field.message": "El parámetro '{field}' debe ser un {expected} válido.",
    "error.title.invalid.argument": "Argumento Inválido",
    "illegal.argument.detail": "Uno o más parámetros de la solicitud no son válidos.",
    "error.title.database.constraint.violation": "Violación de Integridad",
    "database.constraint.violation.detail": "La operación viola una restricción de integridad de datos.",
    "error.title.internal.server.error": "Error Interno del Servidor",
    "internal.server.error.detail": "Ocurrió un error inesperado. Inténtelo de nuevo más tarde.",
    "error.title.request": "Error en la Solicitud",
    "validation.name.required": "El nombre es obligatorio.",
    "validation.name.invalid": "El nombre debe ser un texto.",
    "validation.name.size": "El nombre debe tener entre {min} y {max} caracteres.",
    "validation.price.required": "El precio es obligatorio.",
    "validation.price.invalid": "El precio debe ser un número válido.",
    "validation.price.min": "El precio debe ser como mínimo {min}.",
    "validation.price.max": "El precio debe ser como máximo {max}.",
    "validation.price.scale": "El precio debe tener como máximo {scale} decimales.",
    "validation.description.invalid": "La descripción debe ser un texto.",
    "validation.description.size": "La descripción debe tener como máximo {max} caracteres.",
    "validation.quantity.required": "La cantidad es obligatoria.",
    "validation.quantity.invalid": "La cantidad debe ser un número entero.",
    "validation.quantity.min": "La cantidad debe ser como mínimo {min}.",
    "validation.quantity.max": "La cantidad debe ser como máximo {max}.",
    "validation.business.low.value": (
        "Los productos de bajo valor (precio < {threshold}) no pueden tener una cantidad mayor que {limit}."
    ),
    "validation.business.high.value": (
        "Los productos de alto valor (precio > {threshold}) deben tener una cantidad menor o igual a {limit}."
    ),
    "productquery.name.size": "El filtro de nombre debe tener entre {min} y {max} caracteres.",
    "productquery.price.min": "El filtro de precio debe ser como mínimo {min}.",
    "productquery.price.max": "El filtro de precio debe ser como máximo {max}.",
    "productquery.quantity.min": "El filtro de cantidad debe ser como mínimo {min}.",
    "productquery.quantity.max": "El filtro de cantidad debe ser como máximo {max}.",
    "productquery.price.range.invalid": "El precio máximo debe ser mayor o igual al precio mínimo.",
    "productquery.quantity.range.invalid": (
        "La cantidad máxima debe ser mayor o igual a la cantidad mínima."
    ),
    "pagination.page.invalid": "El índice de página debe ser un entero no negativo.",
    "pagination.size.invalid": "El tamaño de página debe ser un entero entre 1 y {max}.",
    "pagination.sort.invalid": "No se puede ordenar por '{value}'. Propiedades permitidas: {allowed}.",
    "pagination.direction.invalid": "La dirección de orden '{value}' debe ser 'asc' o 'desc'.",
    "request.body.object": "El cuerpo de la solicitud debe ser un objeto JSON.",
}

CATALOGS: Dict[str, Dict[str, str]] = {
    "en-us": _EN_US,
    "pt-br": _PT_BR,
    "es-es": _ES_ES,
}


def default_language() -> str:
    return settings.LANGUAGE_CODE.lower()


def resolve_language(request: Optional[HttpRequest]) -> str:
    """Pick the best entry of ``settings.LANGUAGES`` for the request.

    Delegates to Django's ``Accept-Language`` negotiation: an exact tag wins,
    then a bare language (``pt``) or regional variant (``es-mx``) of a
    supported one.  Anything else yields ``settings.LANGUAGE_CODE``.
    """
    if request is None:
        return default_language()
    return translation.get_language_from_request(request).lower()


def get_message(key: str, language: Optional[str] = None, **params: Any) -> str:
    """Render ``key`` in ``language``, falling back to the default language."""
    language = (language or default_language()).lower()
    template = CATALOGS.get(language, {}).get(key)
    if template is None:
        template = CATALOGS.get(default_language(), {}).get(key)
    if template is None:
        logger.warning("messages.missing_key", key=key, language=language)
        return key
    try:
        return template.format(**params)
    except (KeyError, IndexError):
        logger.warning("messages.bad_params", key=key, params=sorted(params))
        return template
