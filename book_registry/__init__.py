"""Book Registry - Çekirdek Uygulama Paketi

Bu paket çekirdek uygulama modüllerini içerir:
- API uç noktaları (api.py)
- Bellek içi kitap deposu (registry.py)
- CLI başlatıcı (cli.py)
- Veri modeli (book.py)
- Ayarlar (config.py)
"""

__version__ = "1.0.0"
