# Kategori etiketi -> görünen ad. Geçerli kategoriler sadece bu anahtarlardır.
CATEGORY_DISPLAY_NAMES = {
    "FICTION": "Ficción",
    "NON_FICTION": "No Ficción",
    "SCIENCE": "Ciencia",
    "HISTORY": "Historia",
}
