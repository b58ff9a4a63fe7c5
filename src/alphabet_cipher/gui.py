import sys

from PyQt5 import QtWidgets

from . import (
    LOWER_RANGE,
    UPPER_RANGE,
    VALIDATION_POLICIES,
    CipherError,
    bellaso_decode,
    bellaso_encode,
    caesar_decode,
    caesar_encode,
)
from .config import load_config
from .history import log_event


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Alphabet Cipher")
        self.resize(640, 420)
        self.config = load_config()
        self.setCentralWidget(self._build_pane())

    def _build_pane(self) -> QtWidgets.QWidget:
        widget = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(widget)

        hint = QtWidgets.QLabel(
            f"Characters must lie between {LOWER_RANGE!r} and {UPPER_RANGE!r} "
            "(space, digits, punctuation and uppercase letters)."
        )
        hint.setWordWrap(True)
        layout.addWidget(hint)

        layout.addWidget(QtWidgets.QLabel("Input"))
        self.input_text = QtWidgets.QPlainTextEdit()
        layout.addWidget(self.input_text)

        options = QtWidgets.QHBoxLayout()
        self.caesar_radio = QtWidgets.QRadioButton("Caesar")
        self.bellaso_radio = QtWidgets.QRadioButton("Bellaso")
        self.caesar_radio.setChecked(True)
        self.caesar_radio.toggled.connect(self._sync_key_fields)
        options.addWidget(self.caesar_radio)
        options.addWidget(self.bellaso_radio)

        options.addWidget(QtWidgets.QLabel("Shift"))
        self.shift_spin = QtWidgets.QSpinBox()
        self.shift_spin.setRange(-100000, 100000)
        self.shift_spin.setValue(self.config.default_shift)
        options.addWidget(self.shift_spin)

        options.addWidget(QtWidgets.QLabel("Key phrase"))
        self.key_input = QtWidgets.QLineEdit()
        options.addWidget(self.key_input)

        options.addWidget(QtWidgets.QLabel("Validation"))
        self.policy_combo = QtWidgets.QComboBox()
        self.policy_combo.addItems(VALIDATION_POLICIES)
        self.policy_combo.setCurrentText(self.config.validation)
        options.addWidget(self.policy_combo)
        layout.addLayout(options)

        layout.addWidget(QtWidgets.QLabel("Output"))
        self.output_text = QtWidgets.QPlainTextEdit()
        self.output_text.setReadOnly(True)
        layout.addWidget(self.output_text)

        buttons = QtWidgets.QHBoxLayout()
        encrypt_btn = QtWidgets.QPushButton("Encrypt")
        decrypt_btn = QtWidgets.QPushButton("Decrypt")
        clear_btn = QtWidgets.QPushButton("Clear")
        exit_btn = QtWidgets.QPushButton("Exit")
        encrypt_btn.clicked.connect(lambda: self._run("encrypt"))
        decrypt_btn.clicked.connect(lambda: self._run("decrypt"))
        clear_btn.clicked.connect(self._clear)
        exit_btn.clicked.connect(self.close)
        for btn in (encrypt_btn, decrypt_btn, clear_btn, exit_btn):
            buttons.addWidget(btn)
        layout.addLayout(buttons)

        self._sync_key_fields()
        return widget

    def _sync_key_fields(self) -> None:
        caesar = self.caesar_radio.isChecked()
        self.shift_spin.setEnabled(caesar)
        self.key_input.setEnabled(not caesar)

    def _clear(self) -> None:
        self.input_text.clear()
        self.output_text.clear()
        self.key_input.clear()

    def _run(self, mode: str) -> None:
        text = self.input_text.toPlainText()
        policy = self.policy_combo.currentText()
        try:
            if self.caesar_radio.isChecked():
                cipher = "caesar"
                shift = self.shift_spin.value()
                if mode == "encrypt":
                    output = caesar_encode(text, shift, policy=policy)
                else:
                    output = caesar_decode(text, shift, policy=policy)
            else:
                cipher = "bellaso"
                key = self.key_input.text()
                if mode == "encrypt":
                    output = bellaso_encode(text, key, policy=policy)
                else:
                    output = bellaso_decode(text, key, policy=policy)
        except CipherError as exc:  # pragma: no cover - GUI feedback
            QtWidgets.QMessageBox.warning(self, "Cipher error", str(exc))
            return
        self.output_text.setPlainText(output)
        if self.config.history:
            log_event(
                action=cipher,
                payload={"mode": mode, "length": len(text), "policy": policy, "source": "gui"},
            )


def run_gui() -> None:
    app = QtWidgets.QApplication(sys.argv)
    window = MainWindow()
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    run_gui()
