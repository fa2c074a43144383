"""
constants.py – Stałe protokołu mostka Serial ↔ SPI
===================================================
Wszystkie opkody, rozmiary ramek i domyślne parametry łącza w jednym
miejscu, żeby można je było dostosować bez modyfikacji logiki.
"""

# ---------------------------------------------------------------------------
# Parametry łącza szeregowego (8N1)
# ---------------------------------------------------------------------------
DEFAULT_BAUDRATE      = 460_800
DEFAULT_READ_TIMEOUT  = None    # None = blokuj bez limitu
DEFAULT_WRITE_TIMEOUT = None

# ---------------------------------------------------------------------------
# Nawiązanie połączenia
# ---------------------------------------------------------------------------
PRIMING_BYTE   = ord("@")   # Bajt wypełniający sekwencji startowej
PRIMING_LENGTH = 64         # Liczba bajtów sekwencji startowej

ECHO_OPCODE = ord("e")      # [e, bajt] → urządzenie odsyła bajt
PROBE_BYTES = (ord("A"), ord("\r"), ord("\n"), 0xFF)

# ---------------------------------------------------------------------------
# Status urządzenia
# ---------------------------------------------------------------------------
STATUS_OPCODE       = ord("?")
STATUS_LENGTH       = 80    # Stała długość odpowiedzi [bajty]
STATUS_FIELD_COUNT  = 9
STATUS_OPEN_BRACKET  = "["
STATUS_CLOSE_BRACKET = "]"

# Indeksy pól w tekście statusu
FIELD_MODEL       = 0
FIELD_SERIAL      = 1
FIELD_UPTIME      = 2
FIELD_VOLTAGE     = 3
FIELD_CURRENT     = 4
FIELD_TEMPERATURE = 5
FIELD_A           = 6
FIELD_B           = 7
FIELD_CS          = 8
FIELD_CRC         = 6       # Ten sam token co FIELD_A – zachowanie firmware

# ---------------------------------------------------------------------------
# Sterowanie wyjściami
# ---------------------------------------------------------------------------
OUTPUT_A_OPCODE   = ord("a")
OUTPUT_B_OPCODE   = ord("b")
CS_ASSERT_OPCODE  = ord("s")
CS_RELEASE_OPCODE = ord("u")

# ---------------------------------------------------------------------------
# Transfery blokowe
# ---------------------------------------------------------------------------
MAX_CHUNK_SIZE     = 64     # Maks. payload jednej ramki
WRITE_HEADER_BASE  = 0xC0   # 11xxxxxx – tylko zapis
READ_HEADER_BASE   = 0x80   # 10xxxxxx – odczyt / odczyt-zapis
HEADER_LENGTH_MASK = 0x3F   # xxxxxx = len-1
READ_FILLER_BYTE   = 0x00   # Wypełnienie przy czystym odczycie
