# retro_chip8/peripherals/display.py
"""
Display Sink（表示先）の定義と、メモリ上のフレームバッファ実装。

インタプリタは DisplaySink インターフェースを介してのみ画面を操作します。
実際のピクセル描画（ウィンドウへの表示）は present() の購読者が担当します。
"""
from abc import ABC, abstractmethod
from typing import Callable, List, Tuple

# @intent:constant CHIP-8の画面解像度。
SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32

# 1フレーム分のピクセル状態。frame[y][x] が True なら点灯。
Frame = Tuple[Tuple[bool, ...], ...]
FrameListener = Callable[[Frame], None]

# @intent:responsibility インタプリタから見た表示デバイスのインターフェースを定義します。
class DisplaySink(ABC):
    # @intent:responsibility (x, y)のピクセルを反転し、結果として消灯したかどうかを返します。
    # @intent:pre-condition 0 <= x < 64, 0 <= y < 32
    @abstractmethod
    def set_pixel(self, x: int, y: int) -> bool:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    # @intent:responsibility 現在のフレームバッファを可視領域へ反映します。
    @abstractmethod
    def present(self) -> None:
        pass


# @intent:responsibility 64x32のブール値グリッドとしてフレームバッファを保持します。
class FrameBuffer(DisplaySink):
    """
    メモリ上のフレームバッファ。
    present() が呼ばれるたびに、その時点のフレームの不変コピーを全購読者へ通知します。
    """
    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        self._width = width
        self._height = height
        self._pixels: List[List[bool]] = [[False] * width for _ in range(height)]
        self._listeners: List[FrameListener] = []
        self._last_frame: Frame = self.snapshot()
        self._present_count = 0

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def present_count(self) -> int:
        return self._present_count

    @property
    def last_presented(self) -> Frame:
        return self._last_frame

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Pixel ({x}, {y}) out of bounds for {self._width}x{self._height} display.")

    def set_pixel(self, x: int, y: int) -> bool:
        self._check_bounds(x, y)
        row = self._pixels[y]
        row[x] = not row[x]
        return not row[x]

    def get_pixel(self, x: int, y: int) -> bool:
        self._check_bounds(x, y)
        return self._pixels[y][x]

    def clear(self) -> None:
        for row in self._pixels:
            for x in range(self._width):
                row[x] = False

    def present(self) -> None:
        self._last_frame = self.snapshot()
        self._present_count += 1
        for listener in list(self._listeners):
            listener(self._last_frame)

    # @intent:responsibility 現在の（未presentを含む）ピクセル状態の不変コピーを返します。
    def snapshot(self) -> Frame:
        return tuple(tuple(row) for row in self._pixels)

    def lit_pixel_count(self) -> int:
        return sum(sum(row) for row in self._pixels)

    def subscribe(self, listener: FrameListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: FrameListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)
