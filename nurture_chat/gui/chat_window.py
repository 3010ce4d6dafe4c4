import threading
import tkinter as tk
from tkinter import scrolledtext

from nurture_chat.api.service import get_default_controller
from nurture_chat.agents.chat_controller import ConversationController
from nurture_chat.domain.models import Message


PLACEHOLDER = "Escribe tu pregunta aquí..."
SEND_LABEL = "Enviar"


def format_message_line(message: Message) -> tuple[str, str]:
    """返回 (显示文本, 标签)，标签决定气泡颜色。"""

    tag = "user" if message.is_user else "assistant"
    return f"{message.text}\n\n", tag


class ChatWindow:
    def __init__(self, root, controller: ConversationController):
        self.root = root
        self.root.title("Asistente de embarazo")
        self.root.configure(bg="#eeeeee")
        self.controller = controller
        self.chat = scrolledtext.ScrolledText(root, width=60, height=24, wrap=tk.WORD, bg="#eeeeee")
        self.chat.pack(fill=tk.BOTH, expand=True, padx=10, pady=10)
        self.chat.tag_config("user", foreground="#FFFFFF", background="#e959a0", justify=tk.RIGHT, rmargin=10)
        self.chat.tag_config("assistant", foreground="#FFFFFF", background="#fdacba", justify=tk.LEFT, lmargin1=10)
        self.chat.config(state=tk.DISABLED)
        bottom = tk.Frame(root, bg="#FFFFFF")
        bottom.pack(fill=tk.X)
        self.entry = tk.Entry(bottom, bg="#EDF2F7", font=("TkDefaultFont", 12))
        self.entry.pack(side=tk.LEFT, fill=tk.X, expand=True, padx=10, pady=10)
        self.entry.bind("<Return>", self.on_send_event)
        self.entry.bind("<FocusIn>", self._clear_placeholder)
        self.entry.bind("<FocusOut>", self._show_placeholder)
        self.send_btn = tk.Button(bottom, text=SEND_LABEL, command=self.on_send, bg="#e959a0", fg="#FFFFFF")
        self.send_btn.pack(side=tk.LEFT, padx=(0, 10))
        self._placeholder_on = False
        self._show_placeholder()
        self.render()

    def render(self):
        self.chat.config(state=tk.NORMAL)
        self.chat.delete(1.0, tk.END)
        for m in self.controller.messages:
            text, tag = format_message_line(m)
            self.chat.insert(tk.END, text, tag)
        self.chat.config(state=tk.DISABLED)
        self.chat.see(tk.END)

    def on_send(self):
        if self.controller.is_busy or self._placeholder_on:
            return
        text = self.entry.get()
        if not text.strip():
            return
        self.controller.set_input(text)
        self.entry.delete(0, tk.END)
        self.send_btn.config(state=tk.DISABLED)

        def worker():
            try:
                self.controller.send_message()
            finally:
                self.root.after(0, self.on_turn_settled)

        threading.Thread(target=worker, daemon=True).start()
        # 用户消息在 worker 内同步追加，稍后刷新即可显示
        self.root.after(50, self.render)

    def on_send_event(self, event):
        self.on_send()
        return "break"

    def on_turn_settled(self):
        self.render()
        self.send_btn.config(state=tk.NORMAL)

    def _clear_placeholder(self, event=None):
        if self._placeholder_on:
            self.entry.delete(0, tk.END)
            self.entry.config(fg="#000000")
            self._placeholder_on = False

    def _show_placeholder(self, event=None):
        if not self.entry.get():
            self.entry.insert(0, PLACEHOLDER)
            self.entry.config(fg="#A0AEC0")
            self._placeholder_on = True


def main():
    root = tk.Tk()
    controller = get_default_controller()
    ChatWindow(root, controller)

    def on_close():
        controller.close()
        root.destroy()

    root.protocol("WM_DELETE_WINDOW", on_close)
    root.mainloop()


if __name__ == "__main__":
    main()
