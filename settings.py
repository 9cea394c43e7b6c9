# Размеры окна
WIDTH = 1200
HEIGHT = 800

# Цвета (RGB)
BG_COLOR = (245, 245, 245)
CHART_BG = (255, 255, 255)
BAR_COLOR = (76, 175, 80)
TEXT_COLOR = (40, 40, 50)
AXIS_COLOR = (150, 150, 160)

# Цвета UI
PANEL_BG = (230, 230, 235)
BTN_BG = (76, 175, 80)
BTN_BG_HOVER = (102, 195, 106)
BTN_BG_DISABLED = (170, 190, 170)
BTN_TEXT = (255, 255, 255)
INPUT_BG = (255, 255, 255)
INPUT_BG_ACTIVE = (235, 245, 255)
INPUT_BORDER = (160, 160, 170)

# Цвета анимаций
HIGHLIGHT_COLOR = (255, 200, 80)
UPDATE_COLOR = (80, 160, 255)
GLOW_COLOR = (255, 255, 200)

# Геометрия панелей
PANEL_H = 60          # высота верхней панели
BOTTOM_PANEL_H = 250  # кнопки + текстовые поля

# Данные
MAX_VALUE = 20
BAR_COUNT_OPTIONS = (12, 20, 50, 100, 150, 200, 500)
DEFAULT_BAR_COUNT = 12

# Анимации
TOTAL_ANIM_DURATION_MS = 600.0

HIGHLIGHT_MS = 200
HIGHLIGHT_SCALE = 1.15
HIGHLIGHT_GLOW = 0.7

UPDATE_MS = 250
UPDATE_SCALE = 1.3
UPDATE_GLOW = 1.0

APPEAR_MS = 500
APPEAR_START_SCALE = 0.5
APPEAR_START_ANGLE = -45.0

CLICK_MS = 150
HOVER_GLOW = 0.4
EXIT_FADE_MS = 400

# Текстовое поле ввода
INPUT_MAX_LINES = 500
INPUT_MAX_CHARS = 6  # на одну строку

# Частота кадров
FPS = 60
