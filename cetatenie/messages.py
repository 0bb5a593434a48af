"""User-facing bot texts and decree number validation."""

from __future__ import annotations

import re

from cetatenie.decree import FindState
from cetatenie.timer import TimeReport, format_duration

DECREE_PATTERN = re.compile(r"[0-9]{1,5}/RD/[0-9]{4}")

START_MESSAGE = """🌟 <b>Bun venit la Cetățenie Analyzer!</b> 🇷🇴

Cu acest bot poți verifica starea dosarului tău de redobândire a cetățeniei române și să primești notificări când se schimbă starea. 

<i>Cum funcționează?</i> 🤔
1. Trimite numărul dosarului în formatul: <b>[număr]/RD/[an]</b>
   Exemplu: <code>123/RD/2023</code>
2. Așteaptă rezultatul
3. Poți adăuga dosarul la notificări pentru a fi anunțat când se schimbă starea
4. Pentru ajutor, tastează /ajutor

Succes în procesul tău! 🍀"""

INVALID_FORMAT = (
    "❌ <b>Format invalid</b> \n\nTe rog folosește formatul: <code>[număr]/RD/[an]</code>"
    "\n\nExemplu: <code>123/RD/2023</code>"
)
SEARCHING = "🔍 <i>Caut dosarul:</i> <code>{}</code>\n\nTe rog așteaptă puțin."
ERROR_MESSAGE = (
    "⚠️ <b>A apărut o eroare:</b> \n\n<code>{}</code>\n\n"
    "Te rugăm să încerci din nou mai târziu."
)
UNKNOWN_STATE = (
    "❓ <b>Stare necunoscută</b>\n\n"
    "Te rugăm să încerci mai târziu sau să contactezi administratorul."
)
SUCCESS_MESSAGE = (
    "🎉 <b>Felicitări!</b> \n\nDosarul <code>{}</code> a fost <b>găsit și rezolvat</b>.\n\n"
    "Timp preluare date: {}\n"
    "Timp analiză document: {}\n\n"
    "Poți continua cu procedurile ulterioare pentru redobândirea cetățeniei române."
)
IN_PROGRESS_MESSAGE = (
    "⏳ <b>Dosar în procesare</b> \n\nDosarul <code>{}</code> a fost "
    "<b>găsit dar nu este rezolvat încă</b>.\n\n"
    "Timp preluare date: {}\n"
    "Timp analiză document: {}\n\n"
    "Va trebui să mai aștepți până când va fi finalizat."
)
NOT_FOUND_MESSAGE = (
    "🔎 <b>Rezultat negativ</b> \n\nDosarul <code>{}</code> <b>nu a fost găsit</b>.\n\n"
    "Timp preluare date: {}\n"
    "Timp analiză document: {}\n\n"
    "Te rugăm să verifici numărul și anul, sau să contactezi autoritățile competente."
)
HELP_MESSAGE = (
    "ℹ️ <b>Ajutor și instrucțiuni</b>\n\n"
    "📌 <i>Cum verific dosarul?</i>\n"
    "Trimite numărul dosarului în formatul: <b>[număr]/RD/[an]</b>\n"
    "Exemplu: <code>123/RD/2023</code>\n\n"
    "📌 <i>Ce înseamnă rezultatele?</i>\n"
    "✅ <b>Găsit și rezolvat</b> - Dosar finalizat, poți continua procedurile\n"
    "🔄 <b>Găsit dar nerezolvat</b> - Dosar în procesare, mai așteaptă\n"
    "❌ <b>Negăsit</b> - Verifică numărul sau contactează autoritățile\n\n"
    "📌 <i>Comenzi disponibile:</i>\n"
    "/start - Mesaj de bun venit\n"
    "/ajutor - Acest mesaj de ajutor\n"
    "/abonamente - Vezi toate abonamentele tale\n"
    "/adaugaAbonament [număr] - Adaugă un dosar la notificări\n"
    "/stergeAbonament [număr] - Șterge un abonament\n"
    "/stergeToateAbonamentele - Șterge toate abonamentele\n\n"
    "📌 <i>Despre notificări</i>\n"
    "• Vei primi notificări când starea dosarului se schimbă\n"
    "• Poți avea mai multe dosare în abonamente\n"
    "• Notificările sunt trimise automat când se detectează schimbări"
)

_RESULT_TEMPLATES = {
    FindState.FOUND_AND_RESOLVED: SUCCESS_MESSAGE,
    FindState.FOUND_BUT_NOT_RESOLVED: IN_PROGRESS_MESSAGE,
    FindState.NOT_FOUND: NOT_FOUND_MESSAGE,
}


def is_decree_number(text: str) -> bool:
    """True when ``text`` is exactly a decree number such as ``123/RD/2023``."""
    return DECREE_PATTERN.fullmatch(text) is not None


def result_message(state: FindState, decree_number: str, report: TimeReport) -> str:
    """The reply describing the outcome of a decree lookup."""
    template = _RESULT_TEMPLATES.get(state)
    if template is None:
        return UNKNOWN_STATE
    return template.format(
        decree_number,
        format_duration(report.fetch_time),
        format_duration(report.parse_time),
    )