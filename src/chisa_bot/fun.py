"""Fun commands: magic conch, khodam check, love meter and friends.

``cekkhodam``, ``cekjodoh`` and ``seberapa`` are deterministic: the same
input always gives the same result, derived from a 32-bit FNV-1a hash.
"""

from __future__ import annotations

import logging
import random

from chisa_bot.exceptions import ExternalServiceError, NotInGroupError, UsageError
from chisa_bot.messages import MSG_GROUP_INFO_FAILED, MSG_NO_MEMBERS, MSG_ONLY_GROUP
from chisa_bot.messaging import GroupAdmin, Mention
from chisa_bot.registry import CommandContext, CommandRegistry

logger = logging.getLogger(__name__)

FNV32_OFFSET_BASIS = 0x811C9DC5
FNV32_PRIME = 0x01000193

CONCH_ANSWERS = (
    "🐚 Ya.", "🐚 Tidak.", "🐚 Mungkin.", "🐚 Coba lagi.",
    "🐚 Tentu saja!", "🐚 Tidak mungkin.", "🐚 Bisa jadi...",
    "🐚 Jelas iya!", "🐚 Hmm, tidak yakin.",
    "🐚 Lebih baik tidak usah tahu.", "🐚 Pasti!",
    "🐚 Kayaknya sih iya.", "🐚 Nggak deh.",
    "🐚 Menurut bintang-bintang... iya!", "🐚 Tanya lagi nanti ya.",
)

KHODAMS = (
    "Macan Putih", "Ular Cobra Emas", "Kulkas 2 Pintu", "Tutup Botol",
    "Sendal Jepit", "Naga Hitam", "Kipas Angin", "Tikus Got",
    "Harimau Sumatra", "Remote TV", "Garuda Sakti", "Kompor Meleduk",
    "Singa Barong", "Ember Bocor", "Ayam Jago", "Panci Ajaib",
    "Kucing Oren", "Galon Kosong", "Elang Bondol", "Shower Mati",
    "Buaya Putih", "Rice Cooker", "Kuda Terbang", "Obat Nyamuk",
    "Singa Putih", "Setrika Panas", "Rajawali Emas", "Jemuran Basah",
    "Banteng Api", "Sapu Lidi Sakti", "Ikan Cupang", "WiFi Tetangga",
    "Naga Api", "Kresek Hitam", "Phoenix Merah", "Sandal Bolong",
    "Serigala Arktik", "Dispenser Error", "Kumbang Emas", "Helm Ojol",
)

ROASTS = (
    "Mukanya kayak Wi-Fi gratisan, semua orang connect tapi nggak ada yang mau bayar.",
    "Kalau kamu jadi makanan, paling jadi nasi putih doang. Plain banget.",
    "Otaknya sih encer, tapi sayangnya bocor.",
    "Kamu tuh kayak tugas kuliah, nggak ada yang mau ngerjain.",
    "Muka 404 Not Found. Sorry, kegantengan tidak ditemukan.",
    "Kamu kayak kode tanpa dokumentasi, nggak ada yang bisa ngerti.",
    "Nilai IP kamu kalah sama harga gorengan.",
    "Kamu tuh kayak file ZIP, harus di-extract dulu baru ada isinya... eh ternyata corrupt.",
    "Kamu kayak browser Internet Explorer, selalu ketinggalan.",
    "Mending jadi NPC aja, soalnya skenario hidup kamu nggak ada plot-nya.",
    "Kamu tuh kayak printer, cuma berfungsi kalau dimarahin dulu.",
    "Kamu kayak charger KW, connect-nya lama, charge-nya nggak nambah.",
    "Kamu tuh kayak alarm pagi, annoying tapi tetep di-snooze.",
    "Kalau hidup kamu jadi film, pasti langsung di-skip penonton.",
    "Kamu kayak PowerPoint, cuma bagus di tampilan tapi isinya kosong.",
    "Kamu tuh kayak bug di production, nggak ada yang mau tanggung jawab.",
    "Kamu kayak capslock, selalu teriak tapi nggak penting.",
    "Muka kamu kayak error 500, internal server teriak minta tolong.",
    "Kamu tuh kayak semicolon di Python, nggak dibutuhin.",
    "Kamu kayak commit tanpa message, ada tapi nggak jelas ngapain.",
)

# (minimum percentage, comment), highest first
JODOH_COMMENTS = (
    (90, "💕 Wah, kalian jodoh banget! Langsung nikah aja!"),
    (70, "😍 Cocok banget nih! Tinggal minta restu ortu~"),
    (50, "😊 Lumayan cocok, masih bisa diperjuangkan!"),
    (30, "😅 Hmm, perlu usaha lebih nih..."),
    (10, "😬 Kayaknya kurang cocok deh..."),
    (0, "💔 Maaf, sepertinya bukan jodoh..."),
)

RATE_COMMENTS = (
    (90, "🌟", "LUAR BIASA! Sempurna!"),
    (70, "😎", "Mantap, keren banget!"),
    (50, "😊", "Lumayan sih, nggak buruk~"),
    (30, "😅", "Yaa... bisa lebih baik lagi..."),
    (10, "😬", "Aduh, kurang nih..."),
    (0, "💀", "Parah... nggak ada harapan."),
)

SEBERAPA_EMOJI = (
    (80, "🔥🔥🔥"),
    (60, "😎"),
    (40, "🤔"),
    (20, "😅"),
    (0, "💀"),
)


def fnv1a_32(text: str) -> int:
    """32-bit FNV-1a hash of the UTF-8 encoding of text."""
    value = FNV32_OFFSET_BASIS
    for byte in text.encode("utf-8"):
        value ^= byte
        value = (value * FNV32_PRIME) & 0xFFFFFFFF
    return value


def progress_bar(percentage: int) -> str:
    """Ten-cell bar for a 0-100 value."""
    filled = percentage // 10
    return "█" * filled + "░" * (10 - filled)


def _tier(value: int, tiers: tuple) -> tuple:
    for tier in tiers:
        if value >= tier[0]:
            return tier
    return tiers[-1]


def khodam_for(name: str) -> str:
    return KHODAMS[fnv1a_32(name.lower()) % len(KHODAMS)]


def jodoh_percentage(name1: str, name2: str) -> int:
    return fnv1a_32(f"{name1.lower()}+{name2.lower()}") % 101


def seberapa_percentage(text: str) -> int:
    return fnv1a_32(text.lower()) % 101


class FunCommands:
    """Random and hash-based entertainment commands.

    ``siapadia`` needs a GroupAdmin to pick from the group's members.
    """

    def __init__(self, rng: random.Random | None = None, group_admin: GroupAdmin | None = None) -> None:
        self._rng = rng or random.Random()
        self.group_admin = group_admin

    def register(self, registry: CommandRegistry) -> None:
        registry.register(self.kerang_ajaib, "kerangajaib")
        registry.register(self.cek_khodam, "cekkhodam")
        registry.register(self.cek_jodoh, "cekjodoh")
        registry.register(self.rate, "rate")
        registry.register(self.roast, "roast")
        registry.register(self.seberapa, "seberapa")
        registry.register(self.siapa_dia, "siapadia")

    async def kerang_ajaib(self, ctx: CommandContext) -> None:
        question = ctx.raw_args
        if not question:
            raise UsageError(
                "⚠️ Penggunaan: .kerangajaib <pertanyaan>\nContoh: .kerangajaib Apakah aku ganteng?",
                command="kerangajaib",
            )
        answer = self._rng.choice(CONCH_ANSWERS)
        await ctx.reply(f"🔮 *Kerang Ajaib*\n\n❓ {question}\n\n{answer}")

    async def cek_khodam(self, ctx: CommandContext) -> None:
        name = ctx.raw_args
        if not name:
            raise UsageError("⚠️ Penggunaan: .cekkhodam <nama>\nContoh: .cekkhodam Budi", command="cekkhodam")
        await ctx.reply(f"🔮 *Cek Khodam*\n\n👤 Nama: {name}\n🐉 Khodam: *{khodam_for(name)}*")

    async def cek_jodoh(self, ctx: CommandContext) -> None:
        """Compatibility between the first name and the rest of the arguments."""
        if len(ctx.args) < 2:
            raise UsageError("⚠️ Penggunaan: .cekjodoh <nama1> <nama2>\nContoh: .cekjodoh Budi Ani", command="cekjodoh")

        name1 = ctx.args[0]
        name2 = " ".join(ctx.args[1:])
        percentage = jodoh_percentage(name1, name2)
        _, comment = _tier(percentage, JODOH_COMMENTS)
        await ctx.reply(
            f"💘 *Cek Jodoh*\n\n👤 {name1} ❤️ {name2}\n\n📊 Kecocokan: *{percentage}%*\n\n{comment}"
        )

    async def rate(self, ctx: CommandContext) -> None:
        subject = ctx.raw_args
        if not subject:
            raise UsageError("⚠️ Penggunaan: .rate <sesuatu>\nContoh: .rate skripsi gw", command="rate")

        score = self._rng.randint(0, 100)
        _, emoji, comment = _tier(score, RATE_COMMENTS)
        await ctx.reply(f"{emoji} *Rate*\n\n📝 {subject}\n\n{progress_bar(score)} {score}/100\n\n{comment}")

    async def roast(self, ctx: CommandContext) -> None:
        name = ctx.raw_args or ctx.message.display_name
        await ctx.reply(f"🔥 *Roasting Time!*\n\n👤 {name}\n\n{self._rng.choice(ROASTS)}")

    async def seberapa(self, ctx: CommandContext) -> None:
        text = ctx.raw_args
        if not text:
            raise UsageError(
                "⚠️ Penggunaan: .seberapa <sifat> <nama>\nContoh: .seberapa ganteng Budi",
                command="seberapa",
            )
        percentage = seberapa_percentage(text)
        _, emoji = _tier(percentage, SEBERAPA_EMOJI)
        await ctx.reply(f"📊 *Seberapa {text}?*\n\n{progress_bar(percentage)} {percentage}%\n\n{emoji}")

    async def siapa_dia(self, ctx: CommandContext) -> None:
        """Answer a "who is ..." question with a random group member."""
        question = ctx.raw_args
        if not question:
            raise UsageError(
                "⚠️ Penggunaan: .siapadia <pertanyaan>\nContoh: .siapadia yang paling rajin",
                command="siapadia",
            )
        if not ctx.message.is_group:
            raise NotInGroupError(MSG_ONLY_GROUP)

        try:
            members = await self._members(ctx.chat_id)
        except ExternalServiceError as e:
            logger.warning("Failed to list group members", extra={"chat_id": ctx.chat_id, "error": e.message})
            await ctx.reply(MSG_GROUP_INFO_FAILED)
            return
        if not members:
            await ctx.reply(MSG_NO_MEMBERS)
            return

        picked = self._rng.choice(members)
        await ctx.reply(
            f"🎯 *Siapa Dia?*\n\n❓ {question}\n\n👉 Jawabannya adalah: @{picked.name}!",
            mentions=(picked,),
        )

    async def _members(self, chat_id: str) -> list[Mention]:
        if self.group_admin is None:
            return []
        return await self.group_admin.list_members(chat_id)
