ESSENCE_PROMPT = """\
Gere uma mensagem calorosa de "Bão Dia" para o usuário.
Se a localização for fornecida, mencione algo suave sobre o clima ou o dia lá.
Localização: {location}.
Retorne um JSON com:
- greeting: Uma saudação amigável e regional (estilo mineiro/interiorano gentil).
- quote: Uma citação inspiradora curta.
- wordOfDay: Uma palavra interessante do português com significado.
- tip: Uma dica de bem-estar para a manhã.
"""

UNKNOWN_LOCATION = "Desconhecida"

IMAGE_STYLE_PROMPT = (
    "Uma representação artística de: {prompt}. "
    "Estilo de pintura a óleo suave ou fotografia artística de alta qualidade."
)

DEFAULT_IMAGE_PROMPT = "Uma mulher caminhando no campo ao amanhecer"
