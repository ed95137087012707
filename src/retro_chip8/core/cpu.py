# retro_chip8/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
from abc import ABC, abstractmethod
from typing import Optional, Dict

from retro_chip8.transport.bus import Bus
from retro_chip8.core.snapshot import Snapshot, Operation
from retro_chip8.core.state import CpuState

# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    CPUエミュレーションの基底となる抽象クラス。
    Busとのインターフェース、基本的な状態管理、命令サイクルの抽象化を提供します。
    """
    # @intent:pre-condition `bus`は有効なBusオブジェクトである必要があります。
    def __init__(self, bus: Bus):
        self._bus = bus
        self._state: CpuState = self._create_initial_state()
        self._instruction_count: int = 0
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    # @intent:responsibility 初期状態のCpuStateオブジェクトを生成します。
    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        """
        CPUの初期状態を生成して返します。
        """
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._instruction_count = 0

    def get_state(self) -> CpuState:
        """
        現在のCPUの状態（レジスタ値など）を返します。
        """
        return self._state

    @property
    def instruction_count(self) -> int:
        return self._instruction_count

    # @intent:responsibility 現在のPCからオペコードをフェッチします。
    @abstractmethod
    def _fetch(self) -> int:
        pass

    # @intent:responsibility フェッチしたオペコードを解析し、Operationオブジェクトに変換します。
    # @intent:post-condition 未知のオペコードの場合はDecodeErrorを送出します。
    @abstractmethod
    def _decode(self, opcode: int, address: int) -> Operation:
        pass

    # @intent:responsibility デコードされた命令を実行し、CPUの状態を更新します。
    @abstractmethod
    def _execute(self, operation: Operation) -> None:
        pass

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー（ログクリア→フェッチ→デコード→PC更新→実行→Snapshot生成）を定義します。
    def step(self) -> Optional[Snapshot]:
        """
        CPUを1命令サイクル進め、その時点でのCPUとバスの状態を含むSnapshotを返します。
        停止中（_is_haltedがTrue）の場合は何も実行せずNoneを返します。
        """
        # 1. 前処理: 前サイクルまでの残存ログを破棄
        self._bus.get_and_clear_activity_log()

        # 2. 停止判定 (Hook)
        if self._is_halted():
            return None

        # 3. フェッチ
        initial_pc = self._state.pc
        opcode = self._fetch()

        # 4. デコード
        operation = self._decode(opcode, initial_pc)

        # 5. PC更新 (Hook)
        # ジャンプ・コール・スキップ命令はこの値を上書き、または加算する
        self._update_pc(operation)

        # 6. 実行
        self._execute(operation)

        # 7. 後処理 & Snapshot生成
        self._instruction_count += 1
        return Snapshot(
            state=self._state,
            operation=operation,
            instruction_count=self._instruction_count,
            bus_activity=self._bus.get_and_clear_activity_log()
        )

    # @intent:responsibility 命令実行を止めるべき状態かどうかを返します。デフォルトは常に実行可能です。
    def _is_halted(self) -> bool:
        return False

    # @intent:responsibility 命令実行前にPCを命令長分進めます。
    def _update_pc(self, operation: Operation) -> None:
        self._state.pc = (self._state.pc + operation.length) & 0xFFFF

    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        """
        現在のレジスタ値を辞書形式で返す。
        UIがCPUの内部構造を知らなくても値を表示できるようにするために使用される。
        """
        pass
