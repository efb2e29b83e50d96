"""Core module - Decodificación del stream serie del PAM.

Estructura:
- framing/         → Bytes/texto → líneas
- parsing/         → Predicados, schema detector, row decoder, coerción
- classification/  → Catálogo de sensores y unidades
- state/           → Series acotadas y raw log
- timing/          → Timestamp del dispositivo vs. llegada
- export/          → Tablas CSV
- pipeline/        → TelemetryDecoder (dueño del estado)
- monitoring/      → Stats
"""
