import logging
import sys

from Qt.QtWidgets import QMainWindow, QApplication
from Qt.QtGui import QFont

from .line_editor import PlaygroundEditor
from .behaviors.syntax_highlighting import SyntaxHighlighting
from .editor_options import EditorOptions

SAMPLE = "SELECT { 'name': user.name } from users;"


def main() -> int:
    logging.basicConfig(level=logging.INFO)
    app = QApplication(sys.argv)
    win = QMainWindow()
    win.setWindowTitle("LyQL Playground")

    # Everything else comes from DEFAULT_OPTIONS
    options = EditorOptions({"font": QFont("Monospace", pointSize=11)})

    edit = PlaygroundEditor(options, parent=win)
    edit.addBehavior(SyntaxHighlighting)
    edit.setPlainText(SAMPLE)

    win.setCentralWidget(edit)
    win.resize(800, 500)
    win.show()

    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
