"""
main.py — точка входа визуализатора сортировки подсчётом (Counting Sort Visualizer).

Модуль инициализирует Pygame-окно, настраивает параметры HiDPI-рендеринга
(для macOS / Retina-дисплеев), создаёт UI и запускает основной цикл
отрисовки и обработки событий. При закрытии окна содержимое плавно гаснет.
"""

import os
import sys
import time
import traceback
import pygame
from settings import *
from ui import UI


def draw_exit_fade(screen, progress):
    """Затемняет кадр поверх уже нарисованного содержимого (progress 0..1)."""
    veil = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
    veil.fill((0, 0, 0, int(255 * max(0.0, min(1.0, progress)))))
    screen.blit(veil, (0, 0))


def main():
    """
    Точка входа приложения Counting Sort Visualizer.

    Основные задачи:
        1. Настроить SDL для корректной работы в HiDPI-режиме.
        2. Инициализировать Pygame и окно визуализации.
        3. Создать UI (он сам генерирует первый массив).
        4. Запустить главный цикл приложения:
            - обработка событий (клавиатура, мышь);
            - обновление отображения;
            - поддержание стабильного FPS;
            - анимация затухания при закрытии окна.

    Исключения:
        Любые непойманные исключения логируются в консоль с трассировкой.
    """
    try:
        # --- Retina / HiDPI Fix (macOS + SDL2) ---
        os.environ["SDL_VIDEO_ALLOW_HIGHDPI"] = "1"
        os.environ.pop("SDL_VIDEO_HIGHDPI_DISABLED", None)

        # --- Инициализация Pygame ---
        pygame.init()
        print("[INFO] Pygame успешно инициализирован.")

        # --- Создание окна ---
        try:
            screen = pygame.display.set_mode(
                (WIDTH, HEIGHT),
                pygame.HWSURFACE | pygame.DOUBLEBUF
            )
            pygame.display.set_caption("Counting Sort Visualizer")
        except pygame.error as e:
            print(f"[ERROR] Ошибка при создании окна: {e}")
            sys.exit(1)

        clock = pygame.time.Clock()
        ui = UI(screen)

        # --- Основной цикл ---
        running = True
        exit_started = None
        consecutive_errors = 0
        MAX_CONSECUTIVE_ERRORS = 5  # после 5 подряд ошибок — аварийный выход

        try:
            while running:
                try:
                    # --- Обработка событий ---
                    for event in pygame.event.get():
                        if event.type == pygame.QUIT:
                            if exit_started is None:
                                exit_started = time.perf_counter()
                            else:
                                # повторное закрытие — без анимации
                                running = False
                        elif exit_started is None:
                            try:
                                ui.handle_event(event)
                            except Exception as event_error:
                                print(f"\n[WARN] Ошибка при обработке события: {event_error}")
                                traceback.print_exc()

                    # --- Отрисовка ---
                    try:
                        screen.fill(BG_COLOR)
                        ui.draw()
                        if exit_started is not None:
                            fade = (time.perf_counter() - exit_started) * 1000.0 / EXIT_FADE_MS
                            draw_exit_fade(screen, fade)
                            if fade >= 1.0:
                                running = False
                        pygame.display.flip()
                    except pygame.error as pg_err:
                        print(f"\n[ERROR] Ошибка Pygame при отрисовке: {pg_err}")
                        traceback.print_exc()
                        running = False
                        continue
                    except Exception as draw_err:
                        print(f"\n[ERROR] Ошибка в отрисовке кадра: {draw_err}")
                        traceback.print_exc()
                        consecutive_errors += 1
                        if consecutive_errors >= MAX_CONSECUTIVE_ERRORS:
                            print(f"[FATAL] Слишком много подряд ошибок отрисовки ({consecutive_errors}), выходим.")
                            running = False
                        continue
                    else:
                        consecutive_errors = 0

                    clock.tick(FPS)

                except KeyboardInterrupt:
                    print("\n[INFO] Остановка по Ctrl+C")
                    running = False

                except SystemExit:
                    raise

                except Exception as loop_error:
                    print(f"\n[FATAL] Необработанная ошибка в основном цикле: {loop_error}")
                    traceback.print_exc()
                    running = False

        finally:
            try:
                pygame.quit()
            except Exception as quit_err:
                print(f"\n[WARN] Ошибка при pygame.quit(): {quit_err}")
                traceback.print_exc()

    except KeyboardInterrupt:
        print("\n[INFO] Завершение по Ctrl+C")

    except Exception as e:
        print(f"\n[FATAL] Критическая ошибка при запуске: {e}")
        traceback.print_exc()

    finally:
        pygame.quit()
        print("[INFO] Приложение завершено.")


if __name__ == "__main__":
    main()
