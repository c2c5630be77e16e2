"""Operator-facing feedback messages."""

from scan_engine.domain.classification import (
    Classification,
    Expected,
    WalkIn,
    WrongBooth,
)

DEFAULT_LOCALE = "es"

_CATALOG: dict[str, dict[str, str]] = {
    "en": {
        "expected": "✓ {name} - Expected attendee",
        "wrong_booth": "⚠ {name} - Wrong booth (expected at: {expected})",
        "registration_required": "⛔ Registration required",
        "unknown_location": "unknown",
        "conflict": "⚠ {name} - ⚠️ Should be at: {session}",
        "walk_in": "ℹ {name} - Walk-in (not pre-registered)",
        "out_of_schedule": "ℹ {name} - Outside session hours",
        "auto_created": " [Auto-created]",
        "duplicate": (
            "Frequent scan: {name} was already scanned at this {place} recently."
        ),
        "place_location": "booth",
        "place_session": "session",
        "missing_target": "Internal error: neither location nor session specified.",
        "offline_saved": "Offline: scan for {name} saved locally.",
        "save_failed": "Failed to save scan: {error}",
        "processing_failed": "Failed to process scan: {error}",
    },
    "es": {
        "expected": "✓ {name} - Asistente esperado",
        "wrong_booth": "⚠ {name} - Stand equivocado (esperado en: {expected})",
        "registration_required": "⛔ Registro requerido",
        "unknown_location": "desconocido",
        "conflict": "⚠ {name} - ⚠️ Debería estar en: {session}",
        "walk_in": "ℹ {name} - Walk-in (no pre-registrado)",
        "out_of_schedule": "ℹ {name} - Fuera de horario de sesión",
        "auto_created": " [Auto-creado]",
        "duplicate": (
            "Escaneo frecuente: {name} ya fue escaneado en este {place} recientemente."
        ),
        "place_location": "stand",
        "place_session": "sesión",
        "missing_target": "Error interno: no se indicó stand ni sesión.",
        "offline_saved": "Sin conexión: escaneo de {name} guardado localmente.",
        "save_failed": "No se pudo guardar el escaneo: {error}",
        "processing_failed": "No se pudo procesar el escaneo: {error}",
    },
}


def message(locale: str, key: str, **values: object) -> str:
    """Render a catalog message, falling back to the default locale."""
    catalog = _CATALOG.get(locale, _CATALOG[DEFAULT_LOCALE])
    return catalog[key].format(**values)


def feedback_message(
    locale: str,
    classification: Classification,
    attendee_name: str,
    was_auto_created: bool,
) -> str:
    """Build the feedback shown to the scanner operator."""
    if isinstance(classification, Expected):
        text = message(locale, "expected", name=attendee_name)
    elif isinstance(classification, WrongBooth):
        if classification.registration_required:
            expected = message(locale, "registration_required")
        else:
            expected = classification.expected_location_name or message(
                locale, "unknown_location"
            )
        text = message(locale, "wrong_booth", name=attendee_name, expected=expected)
    elif isinstance(classification, WalkIn) and classification.conflict is not None:
        text = message(
            locale, "conflict", name=attendee_name, session=classification.conflict.name
        )
    elif isinstance(classification, WalkIn):
        text = message(locale, "walk_in", name=attendee_name)
    else:
        text = message(locale, "out_of_schedule", name=attendee_name)
    if was_auto_created:
        text += message(locale, "auto_created")
    return text
