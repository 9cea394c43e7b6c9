import math
from dataclasses import dataclass

import pygame
import random
from settings import *
from player import SchedulePlayer
from schedule import Highlight, UpdateValue, build_appearance_schedule, build_schedule
from sorting import counting_sort, generate_random_numbers
from text_input import format_sample, parse_sample

@dataclass
class Button:
    rect: pygame.Rect
    label: str
    action: str

    def __getitem__(self, key):
        return getattr(self, key)

class UI:
    def __init__(self, screen, player=None, rng=None):
        self.screen = screen
        self.font = pygame.font.SysFont("consolas", 20)
        self.small = pygame.font.SysFont("consolas", 16)
        self.tiny = pygame.font.SysFont("consolas", 12)

        self.rng = rng if rng is not None else random.Random()
        self.player = player if player is not None else SchedulePlayer()
        self._clock = self.player.clock

        # кешируемые слои
        self.toolbar_surface = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
        self.toolbar_needs_redraw = True
        self.bars_surface = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)

        # геометрия графика
        self.chart_rect = pygame.Rect(50, PANEL_H + 10, WIDTH - 100, HEIGHT - PANEL_H - BOTTOM_PANEL_H - 20)

        # данные: current_data — «истинный» массив, display_values — то, что сейчас на экране
        self.bar_count = DEFAULT_BAR_COUNT
        self.current_data = []
        self.display_values = []

        # состояние UI
        self.buttons = []
        self._build_buttons()
        self._hover_btn = None
        self._hover_bar = None
        self._click_anims = {}

        # текстовые поля
        area_y = HEIGHT - BOTTOM_PANEL_H + 80
        area_w = (WIDTH - 60) // 2
        self.input_rect = pygame.Rect(20, area_y, area_w, BOTTOM_PANEL_H - 95)
        self.output_rect = pygame.Rect(40 + area_w, area_y, area_w, BOTTOM_PANEL_H - 95)
        self.input_active = False
        self.input_lines = [""]
        self.output_text = ""

        # состояние анимаций
        self.bar_effects = {}
        self.appear_events = []
        self.appear_t0 = 0.0

        self.temp_message = None
        self.message_end_time = 0

        self._generate(animate=True)

    def _build_buttons(self):
        """Кнопки: выбор количества столбцов сверху, действия — над текстовыми полями."""
        self.buttons = []

        PADDING_X = 20
        PADDING_Y = 8
        SPACING = 20

        _, text_h = self.font.size("Sample")
        height = text_h + PADDING_Y * 2

        selector_w = self.font.size(f"Bars: {max(BAR_COUNT_OPTIONS)}")[0] + PADDING_X * 2
        self.buttons.append(Button(
            pygame.Rect(20, (PANEL_H - height) // 2, selector_w, height),
            self._bar_count_label(),
            "bar_count",
        ))

        labels = [
            ("Generate Random", "generate"),
            ("Sort (Counting Sort)", "sort"),
            ("Sort Text Values", "sort_text"),
        ]
        widths = [self.font.size(label)[0] + PADDING_X * 2 for label, _ in labels]
        total_w = sum(widths) + SPACING * (len(widths) - 1)

        x = (WIDTH - total_w) // 2
        y = HEIGHT - BOTTOM_PANEL_H + 10
        for (label, action), w in zip(labels, widths):
            self.buttons.append(Button(pygame.Rect(x, y, w, height), label, action))
            x += w + SPACING

        self.toolbar_needs_redraw = True

    def _bar_count_label(self):
        return f"Bars: {self.bar_count}"

    def _button(self, action):
        for btn in self.buttons:
            if btn.action == action:
                return btn
        return None

    # ---------- EVENTS ----------

    def handle_event(self, event):
        if event.type == pygame.MOUSEMOTION:
            new_hover = None
            for btn in self.buttons:
                if btn.rect.collidepoint(event.pos) and self._is_enabled(btn):
                    new_hover = btn
                    break
            if new_hover is not self._hover_btn:
                self._hover_btn = new_hover
                self.toolbar_needs_redraw = True
            self._hover_bar = self._bar_at(event.pos)

        elif event.type == pygame.MOUSEBUTTONDOWN and getattr(event, "button", None) == 1:
            was_active = self.input_active
            self.input_active = self.input_rect.collidepoint(event.pos)
            if self.input_active != was_active:
                self.toolbar_needs_redraw = True

            for btn in self.buttons:
                if btn.rect.collidepoint(event.pos) and self._is_enabled(btn):
                    self._run_action(btn.action)
                    return

        elif event.type == pygame.MOUSEBUTTONDOWN and getattr(event, "button", None) == 3:
            # правый клик по селектору — назад по списку
            btn = self._button("bar_count")
            if btn is not None and btn.rect.collidepoint(event.pos):
                self._run_action("bar_count_prev")

        elif event.type == pygame.KEYDOWN:
            if self.input_active:
                self._handle_text_input(event)
            else:
                self._handle_shortcuts(event)

    def _handle_shortcuts(self, event):
        keymap = {
            pygame.K_g: "generate",
            pygame.K_s: "sort",
            pygame.K_t: "sort_text",
            pygame.K_b: "bar_count",
            pygame.K_RIGHT: "bar_count",
            pygame.K_LEFT: "bar_count_prev",
        }
        action = keymap.get(event.key)
        if action:
            self._run_action(action)

    def _handle_text_input(self, event):
        lines = self.input_lines
        if event.key == pygame.K_RETURN:
            if len(lines) < INPUT_MAX_LINES:
                lines.append("")
        elif event.key == pygame.K_BACKSPACE:
            if lines[-1]:
                lines[-1] = lines[-1][:-1]
            elif len(lines) > 1:
                lines.pop()
        elif event.key == pygame.K_ESCAPE:
            self.input_active = False
        else:
            ch = event.unicode
            if (ch.isdigit() or (ch == "-" and not lines[-1])) and len(lines[-1]) < INPUT_MAX_CHARS:
                lines[-1] += ch

        self.toolbar_needs_redraw = True

    def input_text(self):
        return "\n".join(self.input_lines)

    def set_input_text(self, text):
        self.input_lines = text.split("\n") if text else [""]
        self.toolbar_needs_redraw = True

    def _bar_at(self, pos):
        n = len(self.display_values)
        if not n or not self.chart_rect.collidepoint(pos):
            return None
        slot = self.chart_rect.width / n
        i = int((pos[0] - self.chart_rect.x) / slot)
        return i if 0 <= i < n else None

    # ---------- ACTIONS ----------

    def _run_action(self, action: str):
        """Выполняет действие по строковому идентификатору; ошибки показываются сообщением."""
        handlers = {
            "generate": lambda: self._generate(animate=True),
            "sort": self._run_sort,
            "sort_text": self._run_sort_text,
            "bar_count": lambda: self._cycle_bar_count(+1),
            "bar_count_prev": lambda: self._cycle_bar_count(-1),
        }
        handler = handlers.get(action)
        if handler is None:
            return

        btn = self._button("bar_count" if action == "bar_count_prev" else action)
        if btn is not None:
            self._click_anims[btn.action] = self._clock()

        try:
            handler()
        except Exception as e:
            print(f"[WARN] Ошибка в действии '{action}': {e}")
            self._show_temp_message(f"Error: {e}")
        self.toolbar_needs_redraw = True

    def _generate(self, animate=True):
        self.player.cancel()
        data = generate_random_numbers(self.bar_count, MAX_VALUE, rng=self.rng)
        self._display_data(data)
        if animate:
            self._start_appearance()

    def _run_sort(self):
        sorted_data = counting_sort(self.current_data)
        self._animate_sort(sorted_data)

    def _run_sort_text(self):
        values = parse_sample(self.input_text())
        negatives = [v for v in values if v < 0]
        if negatives:
            values = [v for v in values if v >= 0]
            self._show_temp_message(f"Ignored {len(negatives)} negative value(s)")
        elif not values:
            self._show_temp_message("No numbers found in the text area")

        sorted_values = counting_sort(values)
        self.output_text = format_sample(sorted_values)

        self.player.cancel()
        self._display_data(values)
        self._animate_sort(sorted_values)

    def _cycle_bar_count(self, step):
        options = list(BAR_COUNT_OPTIONS)
        try:
            i = options.index(self.bar_count)
        except ValueError:
            i = 0
        self.bar_count = options[(i + step) % len(options)]
        btn = self._button("bar_count")
        if btn is not None:
            btn.label = self._bar_count_label()

    def _display_data(self, data):
        self.current_data = list(data)
        self.display_values = list(data)
        self.bar_effects.clear()
        self.appear_events = []
        self._hover_bar = None

    def _start_appearance(self):
        self.appear_events = build_appearance_schedule(self.display_values, TOTAL_ANIM_DURATION_MS)
        self.appear_t0 = self._clock()

    def _animate_sort(self, sorted_data):
        if self.player.active:
            # новое действие отменяет незавершённую анимацию
            self.player.cancel()
            self.display_values = list(self.current_data)
            self.bar_effects.clear()

        schedule = build_schedule(self.current_data, sorted_data, TOTAL_ANIM_DURATION_MS)
        self.player.start(schedule, on_finished=self._on_sort_finished)

    def _on_sort_finished(self, schedule):
        self.current_data = list(schedule.sorted)
        self.display_values = list(schedule.sorted)

    def _show_temp_message(self, message: str, duration: float = 3.0):
        """Показывает временное сообщение"""
        self.temp_message = message
        self.message_end_time = self._clock() + duration

    def _is_enabled(self, btn) -> bool:
        if btn["action"] == "sort" and not self.current_data:
            return False
        return True

    # ---------- ANIMATION ----------

    def _advance_animation(self, now=None):
        now = self._clock() if now is None else now

        for ev in self.player.due_events(now):
            if isinstance(ev, Highlight):
                self.bar_effects[ev.index] = {"type": "highlight", "t0": now, "dur": 2 * HIGHLIGHT_MS / 1000.0}
            elif isinstance(ev, UpdateValue):
                if 0 <= ev.index < len(self.display_values):
                    self.display_values[ev.index] = ev.new_value
                self.bar_effects[ev.index] = {"type": "update", "t0": now, "dur": 2 * UPDATE_MS / 1000.0}

        for i in [i for i, fx in self.bar_effects.items() if self._anim_progress(fx, now) >= 1.0]:
            del self.bar_effects[i]

        if self.appear_events:
            last = self.appear_events[-1].offset_ms + APPEAR_MS
            if (now - self.appear_t0) * 1000.0 >= last:
                self.appear_events = []

    @staticmethod
    def _anim_progress(anim, now):
        span = anim["dur"]
        if span <= 0:
            return 1.0
        return min(1.0, (now - anim["t0"]) / span)

    def _appear_progress(self, index, now):
        if not self.appear_events or index >= len(self.appear_events):
            return 1.0
        elapsed_ms = (now - self.appear_t0) * 1000.0 - self.appear_events[index].offset_ms
        return max(0.0, min(1.0, elapsed_ms / APPEAR_MS))

    def _effect_levels(self, index, now):
        """(масштаб, свечение, цвет эффекта) для столбца index."""
        fx = self.bar_effects.get(index)
        if fx is not None:
            wave = math.sin(math.pi * self._anim_progress(fx, now))
            if fx["type"] == "highlight":
                return 1.0 + (HIGHLIGHT_SCALE - 1.0) * wave, HIGHLIGHT_GLOW * wave, HIGHLIGHT_COLOR
            return 1.0 + (UPDATE_SCALE - 1.0) * wave, UPDATE_GLOW * wave, UPDATE_COLOR
        if index == self._hover_bar:
            return 1.0, HOVER_GLOW, GLOW_COLOR
        return 1.0, 0.0, BAR_COLOR

    # ---------- DRAWING ----------

    def draw(self):
        """Рендер кадра. Ошибка в одном слое не роняет весь кадр."""
        now = self._clock()

        try:
            self._advance_animation(now)
        except Exception as anim_err:
            self.player.cancel()
            # незавершённый проход откатываем к зафиксированному массиву
            self.display_values = list(self.current_data)
            self.bar_effects.clear()
            self._show_temp_message(f"Animation error: {anim_err}")

        if self.toolbar_needs_redraw or self._click_anims:
            try:
                self._redraw_toolbar(now)
            except Exception as tb_err:
                self.toolbar_needs_redraw = False
                self._show_temp_message(f"Toolbar redraw error: {tb_err}")

        try:
            self._draw_bars_surface(now)
        except Exception as bars_err:
            self._show_temp_message(f"Bars redraw error: {bars_err}")

        self.screen.blit(self.bars_surface, (0, 0))
        self.screen.blit(self.toolbar_surface, (0, 0))

        for method_name in ("_draw_info_text", "_draw_temp_message"):
            fn = getattr(self, method_name)
            try:
                fn()
            except Exception as draw_err:
                if method_name != "_draw_temp_message":
                    self._show_temp_message(f"{method_name} error: {draw_err}")

    def _redraw_toolbar(self, now):
        surf = self.toolbar_surface
        surf.fill((0, 0, 0, 0))
        pygame.draw.rect(surf, PANEL_BG, pygame.Rect(0, 0, WIDTH, PANEL_H))
        pygame.draw.rect(surf, PANEL_BG, pygame.Rect(0, HEIGHT - BOTTOM_PANEL_H, WIDTH, BOTTOM_PANEL_H))

        for btn in self.buttons:
            rect = btn.rect
            if not self._is_enabled(btn):
                bg = BTN_BG_DISABLED
            elif self._hover_btn is btn:
                bg = BTN_BG_HOVER
            else:
                bg = BTN_BG

            # нажатие: кнопка «проседает» и возвращается
            t0 = self._click_anims.get(btn.action)
            if t0 is not None:
                p = self._anim_progress({"t0": t0, "dur": 2 * CLICK_MS / 1000.0}, now)
                if p >= 1.0:
                    del self._click_anims[btn.action]
                else:
                    s = 1.0 - 0.2 * math.sin(math.pi * p)
                    rect = rect.inflate(int(rect.width * (s - 1)), int(rect.height * (s - 1)))

            pygame.draw.rect(surf, bg, rect, border_radius=10)
            label_surf = self.font.render(btn.label, True, BTN_TEXT)
            text_x = rect.x + (rect.width - label_surf.get_width()) // 2
            text_y = rect.y + (rect.height - label_surf.get_height()) // 2
            surf.blit(label_surf, (text_x, text_y))

        # подписи текстовых полей
        hint = self.small.render("Original values (numbers only, one per line):", True, TEXT_COLOR)
        surf.blit(hint, (self.input_rect.x, self.input_rect.y - 22))
        out_hint = self.small.render("Sorted values:", True, TEXT_COLOR)
        surf.blit(out_hint, (self.output_rect.x, self.output_rect.y - 22))

        # поле ввода
        pygame.draw.rect(surf, INPUT_BG_ACTIVE if self.input_active else INPUT_BG, self.input_rect, border_radius=6)
        pygame.draw.rect(surf, INPUT_BORDER, self.input_rect, 1, border_radius=6)
        text = self.input_text()
        if text:
            self._blit_lines(surf, self.input_lines, self.input_rect, (30, 30, 40), tail=True,
                             cursor=self.input_active)
        else:
            ph = self.small.render("Click and type numbers…", True, (150, 150, 160))
            surf.blit(ph, (self.input_rect.x + 8, self.input_rect.y + 6))

        # поле вывода (только чтение)
        pygame.draw.rect(surf, INPUT_BG, self.output_rect, border_radius=6)
        pygame.draw.rect(surf, INPUT_BORDER, self.output_rect, 1, border_radius=6)
        self._blit_lines(surf, self.output_text.splitlines(), self.output_rect, (30, 30, 40), tail=False)

        self.toolbar_needs_redraw = False

    def _blit_lines(self, surf, lines, rect, color, tail, cursor=False):
        line_h = self.small.get_linesize()
        fit = max(1, (rect.height - 12) // line_h)
        hidden = max(0, len(lines) - fit)
        if hidden:
            # для ввода показываем хвост (там курсор), для вывода — начало
            shown = lines[-fit:] if tail else lines[:fit - 1] + [f"... (+{hidden + 1} more)"]
        else:
            shown = lines

        y = rect.y + 6
        for i, line in enumerate(shown):
            if cursor and i == len(shown) - 1:
                line = line + "_"
            surf.blit(self.small.render(line, True, color), (rect.x + 8, y))
            y += line_h

    def _draw_bars_surface(self, now):
        surf = self.bars_surface
        surf.fill((0, 0, 0, 0))
        pygame.draw.rect(surf, CHART_BG, self.chart_rect)

        values = self.display_values
        if not values:
            msg = self.font.render("No data. Generate numbers or type them below ↓", True, (150, 150, 160))
            surf.blit(msg, (self.chart_rect.centerx - msg.get_width() // 2,
                            self.chart_rect.centery - msg.get_height() // 2))
            return

        n = len(values)
        label_h = 40
        base_y = self.chart_rect.bottom - label_h
        available_h = base_y - self.chart_rect.y - 20
        vmax = max(MAX_VALUE, max(values)) or 1
        slot = self.chart_rect.width / n
        bar_w = max(1, int(slot * 0.8))
        show_labels = slot >= 18

        for i, val in enumerate(values):
            x = self.chart_rect.x + i * slot + (slot - bar_w) / 2
            height = max(1, int(available_h * val / vmax)) if val > 0 else 1

            scale, glow, fx_color = self._effect_levels(i, now)
            appear = self._appear_progress(i, now)
            if appear <= 0.0:
                continue

            color = self._mix(BAR_COLOR, fx_color, glow)
            w = max(1, int(bar_w * scale))
            h = max(1, int(height * scale))
            cx = x + bar_w / 2
            cy = base_y - height / 2

            if appear < 1.0:
                self._draw_appearing_bar(surf, cx, cy, w, h, color, appear)
            else:
                rect = pygame.Rect(int(cx - w / 2), int(cy - h / 2), w, h)
                if glow > 0:
                    halo = rect.inflate(6, 6)
                    pygame.draw.rect(surf, (*GLOW_COLOR, int(180 * glow)), halo, border_radius=3)
                alpha = int(255 * 0.8) if i == self._hover_bar else 255
                pygame.draw.rect(surf, (*color, alpha), rect)

            if show_labels:
                vl = self.tiny.render(str(val), True, TEXT_COLOR)
                surf.blit(vl, (int(cx - vl.get_width() / 2), int(base_y - height - vl.get_height() - 2)))
                il = self.tiny.render(str(i), True, AXIS_COLOR)
                surf.blit(il, (int(cx - il.get_width() / 2), base_y + 6))

        pygame.draw.line(surf, AXIS_COLOR, (self.chart_rect.x, base_y), (self.chart_rect.right, base_y), 1)
        caption = self.small.render("Index", True, AXIS_COLOR)
        surf.blit(caption, (self.chart_rect.centerx - caption.get_width() // 2, base_y + 20))

    def _draw_appearing_bar(self, surf, cx, cy, w, h, color, progress):
        scale = APPEAR_START_SCALE + (1.0 - APPEAR_START_SCALE) * progress
        angle = APPEAR_START_ANGLE * (1.0 - progress)
        piece = pygame.Surface((max(1, int(w * scale)), max(1, int(h * scale))), pygame.SRCALPHA)
        piece.fill((*color, int(255 * progress)))
        # pygame вращает против часовой стрелки, поэтому знак инвертируем
        rotated = pygame.transform.rotate(piece, -angle)
        surf.blit(rotated, rotated.get_rect(center=(int(cx), int(cy))))

    @staticmethod
    def _mix(a, b, t):
        t = max(0.0, min(1.0, t))
        return tuple(int(x + (y - x) * t) for x, y in zip(a, b))

    def _draw_temp_message(self):
        """Рисует временное сообщение"""
        if self.temp_message and self._clock() < self.message_end_time:
            lines = self.temp_message.split('\n')
            y = self.chart_rect.y + 10

            max_width = max(self.font.size(line)[0] for line in lines)
            bg_rect = pygame.Rect(self.chart_rect.x + 10, y - 5, max_width + 20, len(lines) * 25 + 10)
            pygame.draw.rect(self.screen, (40, 40, 60), bg_rect, border_radius=5)
            pygame.draw.rect(self.screen, (100, 100, 150), bg_rect, 2, border_radius=5)

            for line in lines:
                text = self.font.render(line, True, (220, 220, 100))
                self.screen.blit(text, (bg_rect.x + 10, y))
                y += 25

    def _draw_info_text(self):
        info = self.small.render(
            "[G] Generate  [S] Sort  [T] Sort text  [B] Bars",
            True, TEXT_COLOR,
        )
        self.screen.blit(info, (self.buttons[0].rect.right + 30, (PANEL_H - info.get_height()) // 2))

        if self.player.active:
            p = self.player.progress()
            bar_rect = pygame.Rect(WIDTH - 240, (PANEL_H - 16) // 2, 220, 16)
            pygame.draw.rect(self.screen, (200, 200, 210), bar_rect, border_radius=3)
            fill_width = int(bar_rect.width * p)
            if fill_width > 0:
                fill_rect = pygame.Rect(bar_rect.x, bar_rect.y, fill_width, bar_rect.height)
                pygame.draw.rect(self.screen, BAR_COLOR, fill_rect, border_radius=3)
