"""Properties panel pro úpravu vybraného uzlu nebo hrany."""
from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QColorDialog,
    QDockWidget,
    QFormLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QWidget,
)


class DescriptionEdit(QPlainTextEdit):
    """Víceřádkové pole, které při ztrátě fokusu emituje editingFinished."""

    editingFinished = Signal()

    def focusOutEvent(self, event):
        super().focusOutEvent(event)
        self.editingFinished.emit()


class PropertiesPanel(QDockWidget):
    """Dock widget pro zobrazení a úpravu vlastností vybraného prvku."""

    def __init__(self, session, parent=None):
        super().__init__("Properties", parent)
        self.setObjectName("PropertiesPanel")
        self.session = session
        self._init_ui()
        session.store.selection_changed.connect(self.update_for_selection)
        session.store.changed.connect(self.update_for_selection)
        self.update_for_selection()

    def _init_ui(self):
        """Inicializace UI panelu."""
        self.panel_props = QWidget(self)
        form = QFormLayout(self.panel_props)

        self.lbl_empty = QLabel("Select a node or connection", self.panel_props)
        self.lbl_empty.setAlignment(Qt.AlignCenter)
        form.addRow(self.lbl_empty)

        # typ uzlu / popis hrany (jen pro čtení)
        self.lbl_kind = QLabel("Node Type", self.panel_props)
        self.val_kind = QLabel(self.panel_props)
        form.addRow(self.lbl_kind, self.val_kind)

        # label
        self.lbl_label = QLabel("Label", self.panel_props)
        self.ed_label = QLineEdit(self.panel_props)
        self.ed_label.setPlaceholderText("Enter label")
        self.ed_label.editingFinished.connect(self._on_label_changed)
        form.addRow(self.lbl_label, self.ed_label)

        # popis (jen uzly)
        self.lbl_description = QLabel("Description", self.panel_props)
        self.ed_description = DescriptionEdit(self.panel_props)
        self.ed_description.setPlaceholderText("Enter node description")
        self.ed_description.editingFinished.connect(self._on_description_changed)
        form.addRow(self.lbl_description, self.ed_description)

        # barva
        self.lbl_color = QLabel("Color", self.panel_props)
        self.btn_color = QPushButton(self.panel_props)
        self.btn_color.clicked.connect(self._on_color_clicked)
        form.addRow(self.lbl_color, self.btn_color)

        self.btn_delete = QPushButton("Delete", self.panel_props)
        self.btn_delete.clicked.connect(self._on_delete_clicked)
        form.addRow(self.btn_delete)

        self.panel_props.setLayout(form)
        self.setWidget(self.panel_props)

    def _rows(self):
        return (
            self.lbl_kind, self.val_kind, self.lbl_label, self.ed_label,
            self.lbl_description, self.ed_description, self.lbl_color,
            self.btn_color, self.btn_delete,
        )

    def update_for_selection(self):
        """Aktualizuje panel na základě aktuálního výběru."""
        node = self.session.store.selected_node()
        edge = self.session.store.selected_edge()

        for w in self._rows():
            w.setVisible(node is not None or edge is not None)
        self.lbl_empty.setVisible(node is None and edge is None)

        if node is not None:
            self.lbl_kind.setText("Node Type")
            self.val_kind.setText(node.kind)
            self._set_text(self.ed_label, node.data.label)
            if self.ed_description.toPlainText() != node.data.description:
                self.ed_description.setPlainText(node.data.description)
            self._set_color_button(node.data.color)
            self.btn_delete.setText("Delete Node")
        elif edge is not None:
            store = self.session.store
            src, dst = store.node(edge.source), store.node(edge.target)
            self.lbl_kind.setText("Connection")
            self.val_kind.setText(f"{src.label if src else '?'} → {dst.label if dst else '?'}")
            self._set_text(self.ed_label, edge.data.label)
            self.lbl_description.hide()
            self.ed_description.hide()
            self._set_color_button(edge.data.color)
            self.btn_delete.setText("Delete Connection")

    @staticmethod
    def _set_text(edit: QLineEdit, text: str):
        # nepřepisovat rozepsaný text při každé změně diagramu
        if edit.text() != text and not edit.hasFocus():
            edit.setText(text)

    def _set_color_button(self, color: str):
        self.btn_color.setText(color)
        self.btn_color.setStyleSheet(f"background-color: {color}; color: white;")

    # ========== Handlery ==========

    def _on_label_changed(self):
        text = self.ed_label.text()
        store = self.session.store
        node, edge = store.selected_node(), store.selected_edge()
        if node is not None:
            self.session.update_node(node.id, label=text)
        elif edge is not None:
            self.session.update_edge(edge.id, label=text)

    def _on_description_changed(self):
        node = self.session.store.selected_node()
        if node is not None:
            self.session.update_node(node.id, description=self.ed_description.toPlainText())

    def _on_color_clicked(self):
        store = self.session.store
        node, edge = store.selected_node(), store.selected_edge()
        current = node.data.color if node else edge.data.color if edge else None
        if current is None:
            return
        color = QColorDialog.getColor(QColor(current), self, "Color")
        if not color.isValid():
            return
        if node is not None:
            self.session.update_node(node.id, color=color.name())
        else:
            self.session.update_edge(edge.id, color=color.name())

    def _on_delete_clicked(self):
        store = self.session.store
        node, edge = store.selected_node(), store.selected_edge()
        if node is not None:
            if QMessageBox.question(self, "Delete", "Are you sure you want to delete this node?") == QMessageBox.Yes:
                self.session.delete_node(node.id)
        elif edge is not None:
            if QMessageBox.question(self, "Delete", "Are you sure you want to delete this connection?") == QMessageBox.Yes:
                self.session.delete_edge(edge.id)
