"""User-facing reply texts (Indonesian)."""

# General
MSG_ERROR = "❌ Terjadi kesalahan sistem."
MSG_ONLY_GROUP = "⚠️ Perintah ini hanya bisa digunakan di dalam grup."
MSG_ONLY_ADMIN = "⚠️ Perintah ini hanya untuk admin grup."

MSG_MENU = """📋 *Daftar Perintah*
Prefix: {prefixes}

🎮 *Game*
• .tebakkata • .tebakibukota • .tebaknegara
• .tebakbenda • .tebakbendera • .tebakangka • .kuis
• .nyerah (.skip) • .leaderboard (.lb)

👮 *Grup*
• .warn <tag/reply> • .resetwarn <tag/reply>
• .kick <tag/reply> • .autotag on/off
• .tagall

🎉 *Fun*
• .kerangajaib • .cekkhodam • .cekjodoh
• .rate • .roast • .seberapa • .siapadia

🛠️ *Utility*
• .pick a | b | c • .short <link>
• .stats • .menu"""

# Games
MSG_GAME_ACTIVE = "⚠️ Masih ada game yang berjalan! Selesaikan atau .nyerah dulu."
MSG_GAME_NONE = "⚠️ Tidak ada game yang sedang berjalan."
MSG_GAME_SURRENDER = "🏳️ Anda menyerah! Jawabannya adalah: *{answer}*"
MSG_GAME_TIMEOUT = "⏳ Waktu habis! Jawabannya adalah: *{answer}*"
MSG_GAME_CORRECT = "✅ Benar! @{player} mendapat 1 poin. 🎉"
MSG_GAME_TOO_LOW = "📉 Terlalu kecil! Coba angka lebih besar."
MSG_GAME_TOO_HIGH = "📈 Terlalu besar! Coba angka lebih kecil."
MSG_LEADERBOARD_EMPTY = "🏆 Leaderboard masih kosong. Mainkan game dulu!"
MSG_LEADERBOARD_HEADER = "🏆 *Global Leaderboard* 🏆\n_(Reset setiap {days} hari)_\n"

# Moderation
MSG_WARN_USAGE = "⚠️ Reply pesan atau tag member yang ingin di-warn.\nContoh: .warn @member"
MSG_RESETWARN_USAGE = "⚠️ Reply pesan atau tag member yang ingin di-reset warn-nya."
MSG_KICK_USAGE = "⚠️ Tag atau reply user yang ingin di-kick."
MSG_WARN = "⚠️ *PERINGATAN KE-{count}*\n\n@{member}, tolong ikuti aturan grup.\nPeringatan ke-{limit} = Kick."
MSG_WARN_FINAL = "⚠️ *PERINGATAN KE-{count} (FINAL)*\n@{member} otomatis di-kick dari grup."
MSG_WARN_KICK_FAILED = "❌ Gagal meng-kick member. Pastikan bot adalah admin."
MSG_WARN_RESET = "✅ Peringatan @{member} sudah di-reset."
MSG_WARN_NONE = "ℹ️ @{member} tidak punya peringatan."
MSG_KICK_DONE = "👋 Sayonara!"
MSG_KICK_FAILED = "❌ Gagal kick member. Pastikan bot adalah admin."
MSG_AUTOTAG_USAGE = "⚠️ Penggunaan: .autotag on/off"
MSG_AUTOTAG_ON = "✅ Auto-tag member baru diaktifkan."
MSG_AUTOTAG_OFF = "✅ Auto-tag member baru dimatikan."
MSG_TAGALL_TITLE = "📢 *Tag All Members*"
MSG_GROUP_INFO_FAILED = "❌ Gagal mendapatkan info grup."
MSG_NO_MEMBERS = "❌ Tidak ada anggota dalam grup."
MSG_WELCOME = "👋 Halo {member}!\nSelamat datang di grup! 🎉\n\nSemoga betah ya~ 😊"
MSG_GOODBYE = "👋 Sampai jumpa {member}!\nTerima kasih sudah meramaikan grup. 👋"

# Utility
MSG_PICK_USAGE = "⚠️ Format: .pick opsi1 | opsi2 | opsi3\nContoh: .pick Makan | Tidur | Ngoding"
MSG_PICK_TOO_FEW = "⚠️ Minimal 2 pilihan, pisahkan dengan |\nContoh: .pick Makan | Tidur | Ngoding"
MSG_PICK_RESULT = "🎲 *Random Pick!*\n\nDari {count} pilihan:\n_{options}_\n\n🎯 Hasilnya: *{chosen}*"
MSG_SHORT_USAGE = "⚠️ Penggunaan: .short <url>\nContoh: .short https://google.com"
MSG_SHORT_WAIT = "⏳ Sedang memendekkan link..."
MSG_SHORT_FAILED = "❌ Gagal memendekkan link."
MSG_SHORT_DONE = "✅ Link berhasil dipendekkan:\n{url}"
