"""Question banks for the guessing games.

Accepted answers are stored lowercased; the game manager normalizes
submissions the same way before matching.
"""

from __future__ import annotations

from typing import NamedTuple


class Riddle(NamedTuple):
    """A prompt with a display answer and the accepted spellings."""

    prompt: str
    answer: str
    accepted: tuple[str, ...]


class CluedAnswer(NamedTuple):
    """An answer with several alternative clues."""

    answer: str
    clues: tuple[str, ...]


class Flag(NamedTuple):
    emoji: str
    country: str


NUMBER_MIN = 1
NUMBER_MAX = 100

WORDS: tuple[str, ...] = (
    "meja", "kursi", "lemari", "kasur", "bantal", "lampu", "cermin", "pintu",
    "jendela", "lantai", "buku", "pulpen", "pensil", "kertas", "tas", "sepatu",
    "baju", "celana", "jam", "kunci", "piring", "gelas", "sendok", "garpu",
    "pisau", "kompor", "nasi", "roti", "air", "susu", "matahari", "bulan",
    "bintang", "awan", "hujan", "pohon", "bunga", "tanah", "batu", "rumput",
    "kepala", "tangan", "kaki", "mata", "mulut", "rambut", "ayah", "ibu",
    "anak", "guru", "makan", "minum", "tidur", "bangun", "mandi", "duduk",
    "berdiri", "berjalan", "berlari", "melompat", "melihat", "mendengar",
    "berbicara", "berteriak", "berbisik", "mencium", "merasa", "menyentuh",
    "bertanya", "menjawab", "memasak", "mencuci", "menyapu", "mengepel",
    "menyetrika", "membuka", "menutup", "memotong", "mengaduk", "menuang",
    "membaca", "menulis", "menggambar", "menghitung", "bekerja", "membeli",
    "menjual", "membayar", "mencari", "menemukan", "tertawa", "menangis",
    "tersenyum", "marah", "datang", "pergi", "pulang", "menunggu", "memberi",
    "menerima",
)

CAPITALS: tuple[CluedAnswer, ...] = (
    CluedAnswer("Jakarta", (
        "Kota mana yang memiliki ikon Monumen Nasional (Monas)?",
        "Apa nama ibu kota negara Indonesia?",
    )),
    CluedAnswer("Paris", (
        "Kota yang terkenal dengan Menara Eiffel dan Museum Louvre?",
        "Apa nama ibu kota Prancis yang dijuluki Kota Cinta?",
    )),
    CluedAnswer("Tokyo", (
        "Kota mana yang memiliki penyeberangan jalan tersibuk di Shibuya?",
        "Apa nama ibu kota Jepang?",
    )),
    CluedAnswer("London", (
        "Kota tempat Menara jam Big Ben dan Istana Buckingham berada?",
        "Apa nama ibu kota Inggris?",
    )),
    CluedAnswer("Washington D.C.", (
        "Kota mana yang memiliki Gedung Putih (White House)?",
        "Apa nama ibu kota Amerika Serikat (bukan New York)?",
    )),
    CluedAnswer("Roma", (
        "Kota yang memiliki bangunan bersejarah Colosseum?",
        "Apa nama ibu kota Italia?",
    )),
    CluedAnswer("Kuala Lumpur", (
        "Kota yang terkenal dengan Menara Kembar Petronas?",
        "Apa nama ibu kota Malaysia?",
    )),
    CluedAnswer("Beijing", (
        "Kota yang memiliki Kota Terlarang (Forbidden City)?",
        "Apa nama ibu kota Tiongkok?",
    )),
    CluedAnswer("Seoul", (
        "Kota yang dibelah oleh Sungai Han dan terkenal dengan K-Pop?",
        "Apa nama ibu kota Korea Selatan?",
    )),
    CluedAnswer("Moskow", (
        "Kota mana yang memiliki Lapangan Merah dan Kremlin?",
        "Apa nama ibu kota Rusia?",
    )),
    CluedAnswer("Amsterdam", (
        "Kota yang terkenal dengan banyak kanal air dan sepeda?",
        "Apa nama ibu kota Belanda?",
    )),
    CluedAnswer("Berlin", (
        "Kota yang memiliki Gerbang Brandenburg dan sisa-sisa tembok pemisah?",
        "Apa nama ibu kota Jerman?",
    )),
    CluedAnswer("Bangkok", (
        "Kota mana yang memiliki kuil Grand Palace dan Wat Arun?",
        "Apa nama ibu kota Thailand?",
    )),
    CluedAnswer("Kairo", (
        "Kota yang terletak dekat dengan Piramida Giza?",
        "Apa nama ibu kota Mesir?",
    )),
    CluedAnswer("Madrid", (
        "Kota markas klub sepak bola Real Madrid?",
        "Apa nama ibu kota Spanyol?",
    )),
    CluedAnswer("Brasilia", (
        "Kota ini menggantikan Rio de Janeiro sebagai pusat pemerintahan?",
        "Apa nama ibu kota Brasil yang tata kotanya berbentuk pesawat?",
    )),
    CluedAnswer("Ankara", (
        "Kota yang bukan Istanbul, tapi pusat pemerintahan Turki?",
        "Apa nama ibu kota Turki?",
    )),
    CluedAnswer("Canberra", (
        "Sydney punya Gedung Opera yang ikonik, tapi apa ibu kota Australia yang sebenarnya?",
        "Apa nama ibu kota Australia?",
    )),
    CluedAnswer("New Delhi", (
        "Kota yang memiliki gerbang India Gate?",
        "Apa nama ibu kota India?",
    )),
    CluedAnswer("Riyadh", (
        "Kota mana yang memiliki gedung tertinggi Kingdom Centre?",
        "Apa nama ibu kota Arab Saudi?",
    )),
)

COUNTRIES: tuple[CluedAnswer, ...] = (
    CluedAnswer("Amerika Serikat", (
        "Negara mana yang memiliki landmark Patung Liberty?",
        "Apa negara yang identik dengan industri film Hollywood?",
    )),
    CluedAnswer("Jerman", (
        "Negara apa yang terkenal dengan Tembok Berlin?",
        "Negara mana yang menjadi asal mobil BMW dan Mercedes-Benz?",
    )),
    CluedAnswer("Brasil", (
        "Negara yang identik dengan tarian Samba dan karnaval meriah?",
        "Apa negara yang memiliki hutan hujan Amazon terluas?",
    )),
    CluedAnswer("Korea Selatan", (
        "Negara mana yang merupakan asal dari musik K-Pop?",
        "Apa negara yang terkenal dengan makanan Kimchi?",
    )),
    CluedAnswer("Thailand", (
        "Apa negara yang memiliki julukan Negeri Gajah Putih?",
        "Negara yang terkenal dengan kuliner Tom Yum?",
    )),
    CluedAnswer("Kanada", (
        "Negara yang bendera nasionalnya bergambar daun Maple?",
        "Apa negara yang memiliki bagian dari air terjun Niagara di sisi utara?",
    )),
    CluedAnswer("Singapura", (
        "Negara mana yang memiliki ikon patung singa air (Merlion)?",
        "Apa negara yang terkenal dengan aturan kebersihan yang sangat ketat?",
    )),
    CluedAnswer("Swiss", (
        "Apa negara yang terkenal sebagai penghasil jam tangan mewah?",
        "Negara mana yang identik dengan pegunungan Alpen dan cokelat?",
    )),
    CluedAnswer("India", (
        "Negara mana yang memiliki bangunan indah Taj Mahal?",
        "Apa negara yang terkenal dengan industri film Bollywood?",
    )),
    CluedAnswer("Turki", (
        "Negara yang identik dengan makanan Kebab?",
        "Apa negara yang memiliki kota Istanbul di dua benua?",
    )),
    CluedAnswer("Inggris", (
        "Apa negara yang memiliki menara jam Big Ben?",
        "Negara mana yang identik dengan bus tingkat berwarna merah?",
    )),
    CluedAnswer("Meksiko", (
        "Negara yang terkenal dengan topi Sombrero?",
        "Apa negara yang identik dengan makanan Taco dan Nachos?",
    )),
    CluedAnswer("Indonesia", (
        "Negara mana yang memiliki hewan purba Komodo?",
        "Apa negara yang terkenal dengan Candi Borobudur?",
    )),
    CluedAnswer("Yunani", (
        "Apa negara yang identik dengan mitologi dewa-dewi seperti Zeus?",
        "Negara mana yang merupakan tempat lahirnya Olimpiade?",
    )),
    CluedAnswer("Italia", (
        "Negara yang terkenal dengan menara miring Pisa?",
        "Apa negara yang identik dengan Colosseum dan Gladiator?",
    )),
    CluedAnswer("Uni Emirat Arab", (
        "Negara mana yang memiliki gedung tertinggi di dunia (Burj Khalifa)?",
        "Apa negara yang memiliki pulau buatan berbentuk pohon palem?",
    )),
    CluedAnswer("Rusia", (
        "Apa negara yang dijuluki Negeri Beruang Merah?",
        "Negara mana yang merupakan negara terluas di dunia?",
    )),
    CluedAnswer("Portugal", (
        "Negara tempat asal pemain bola Cristiano Ronaldo?",
        "Apa negara yang terkenal dengan kue tart telur (Egg Tart)?",
    )),
    CluedAnswer("Selandia Baru", (
        "Negara yang terkenal dengan burung Kiwi yang tidak bisa terbang?",
        "Apa negara yang menjadi lokasi syuting film The Lord of the Rings?",
    )),
    CluedAnswer("Peru", (
        "Apa negara yang memiliki situs kota kuno Machu Picchu di atas gunung?",
        "Negara yang identik dengan hewan Llama?",
    )),
)

OBJECT_RIDDLES: tuple[Riddle, ...] = (
    Riddle("Aku punya wajah tapi tak punya mata, punya jarum tapi tak menjahit. Apakah aku?", "Jam", ("jam",)),
    Riddle("Aku makin basah saat mengeringkan badanmu. Apakah aku?", "Handuk", ("handuk",)),
    Riddle("Aku punya banyak gigi tapi tidak bisa menggigit. Apakah aku?", "Sisir", ("sisir",)),
    Riddle("Aku punya leher tapi tak punya kepala. Apakah aku?", "Botol / Baju", ("botol", "baju")),
    Riddle("Aku harus dipecahkan dulu baru bisa digunakan. Apakah aku?", "Telur", ("telur",)),
    Riddle("Aku penuh dengan lubang, tapi masih bisa menahan air. Apakah aku?", "Spons", ("spons",)),
    Riddle("Aku punya satu mata tapi tidak bisa melihat. Apakah aku?", "Jarum Jahit", ("jarum jahit", "jarum")),
    Riddle("Aku naik saat hujan turun. Apakah aku?", "Payung", ("payung",)),
    Riddle("Aku punya kaki empat, tapi tidak bisa berjalan. Apakah aku?", "Meja / Kursi", ("meja", "kursi")),
    Riddle(
        "Aku punya kota, gunung, dan sungai, tapi tidak ada rumah atau air. Apakah aku?",
        "Peta",
        ("peta",),
    ),
    Riddle("Aku tinggi saat masih muda, dan pendek saat sudah tua. Apakah aku?", "Lilin", ("lilin",)),
    Riddle("Aku bisa berkeliling dunia tapi tetap diam di sudut. Apakah aku?", "Perangko", ("perangko",)),
    Riddle("Aku punya banyak kunci tapi tidak bisa membuka satu pintu pun. Apakah aku?", "Piano", ("piano",)),
    Riddle(
        "Semakin banyak kamu mengambilku, semakin besar yang aku tinggalkan. Apakah aku?",
        "Lubang / Jejak Kaki",
        ("lubang", "jejak kaki", "jejak"),
    ),
    Riddle("Aku punya tulang belakang, tapi tidak punya tulang lain. Apakah aku?", "Buku", ("buku",)),
    Riddle("Aku punya lidah tapi tidak bisa berbicara atau merasakan rasa. Apakah aku?", "Sepatu", ("sepatu",)),
    Riddle("Aku berjalan naik dan turun tapi tetap di tempat yang sama. Apakah aku?", "Tangga", ("tangga",)),
    Riddle("Aku punya jari tapi tidak punya tulang dan daging. Apakah aku?", "Sarung Tangan", ("sarung tangan",)),
    Riddle("Aku selalu ada di depanmu tapi tidak bisa kau lihat. Apakah aku?", "Masa Depan", ("masa depan",)),
    Riddle(
        "Jika kamu menyebut namaku, aku akan hilang. Apakah aku?",
        "Kesunyian",
        ("kesunyian", "sunyi", "hening", "keheningan"),
    ),
    Riddle("Aku bisa terbang tanpa sayap dan menangis tanpa mata. Apakah aku?", "Awan", ("awan",)),
    Riddle("Aku semakin kecil setiap kali aku mandi. Apakah aku?", "Sabun Batang", ("sabun", "sabun batang")),
    Riddle(
        "Aku punya ranjang tapi tidak pernah tidur, punya mulut tapi tidak bicara. Apakah aku?",
        "Sungai",
        ("sungai",),
    ),
    Riddle(
        "Aku masuk kering dan keluar basah, semakin lama aku di dalam semakin kuat rasanya. Apakah aku?",
        "Kantong Teh",
        ("kantong teh", "teh"),
    ),
)

FLAGS: tuple[Flag, ...] = (
    Flag("🇮🇩", "Indonesia"), Flag("🇲🇾", "Malaysia"), Flag("🇯🇵", "Jepang"),
    Flag("🇰🇷", "Korea Selatan"), Flag("🇺🇸", "Amerika Serikat"), Flag("🇬🇧", "Inggris"),
    Flag("🇫🇷", "Prancis"), Flag("🇩🇪", "Jerman"), Flag("🇷🇺", "Rusia"),
    Flag("🇨🇳", "China"), Flag("🇦🇺", "Australia"), Flag("🇹🇭", "Thailand"),
    Flag("🇻🇳", "Vietnam"), Flag("🇸🇬", "Singapura"), Flag("🇵🇭", "Filipina"),
    Flag("🇮🇳", "India"), Flag("🇧🇷", "Brazil"), Flag("🇦🇷", "Argentina"),
    Flag("🇨🇦", "Kanada"), Flag("🇮🇹", "Italia"),
)

TRIVIA: tuple[Riddle, ...] = (
    Riddle("Apa nama ibu kota provinsi Jawa Timur?", "Surabaya", ("surabaya",)),
    Riddle("Mata uang negara Jepang adalah?", "Yen", ("yen",)),
    Riddle("Binatang yang bisa hidup di air dan di darat disebut?", "Amfibi", ("amfibi",)),
    Riddle(
        "Siapakah penemu bola lampu pijar?",
        "Thomas Alva Edison",
        ("thomas alva edison", "thomas edison", "edison"),
    ),
    Riddle("Tanggal 10 November diperingati sebagai hari apa?", "Hari Pahlawan", ("hari pahlawan",)),
    Riddle("Gudeg adalah makanan khas dari daerah mana?", "Yogyakarta", ("yogyakarta", "jogja", "jogjakarta")),
    Riddle("Alat untuk mengukur gempa bumi disebut?", "Seismograf", ("seismograf",)),
    Riddle("Benua terbesar di dunia adalah?", "Asia", ("asia",)),
    Riddle("Negara manakah yang memiliki julukan 'Negeri Tirai Bambu'?", "China", ("china", "tiongkok", "rrc")),
    Riddle("Apa kepanjangan dari singkatan WHO?", "World Health Organization", ("world health organization",)),
    Riddle("Siapakah presiden pertama Republik Indonesia?", "Ir. Soekarno", ("ir. soekarno", "soekarno", "sukarno")),
    Riddle("Naskah teks proklamasi diketik oleh siapa?", "Sayuti Melik", ("sayuti melik",)),
    Riddle("Kerajaan Hindu tertua di Indonesia adalah?", "Kutai", ("kutai", "kutai kartanegara")),
    Riddle("Candi Borobudur merupakan peninggalan agama?", "Buddha", ("buddha",)),
    Riddle("Siapakah wakil presiden pertama Indonesia?", "Moh. Hatta", ("moh. hatta", "mohammad hatta", "bung hatta")),
    Riddle("Apa nama organisasi pergerakan nasional pertama di Indonesia?", "Budi Utomo", ("budi utomo",)),
    Riddle("Rumus kimia dari air adalah?", "H2O", ("h2o",)),
    Riddle("Planet yang paling dekat dengan Matahari adalah?", "Merkurius", ("merkurius",)),
    Riddle("Hewan yang memakan daging disebut?", "Karnivora", ("karnivora",)),
    Riddle("Gas yang kita hirup saat bernapas adalah?", "Oksigen", ("oksigen", "o2")),
    Riddle("Planet terbesar dalam tata surya kita adalah?", "Jupiter", ("jupiter",)),
    Riddle("Perubahan wujud benda dari cair menjadi padat disebut?", "Membeku", ("membeku",)),
    Riddle("Berapakah hasil dari 7 dikali 8?", "56", ("56",)),
    Riddle("Akar pangkat dua dari 100 adalah?", "10", ("10",)),
    Riddle("Sudut siku-siku besarnya berapa derajat?", "90", ("90 derajat", "90")),
    Riddle("Bilangan prima terkecil adalah?", "2", ("2",)),
    Riddle("1 lusin sama dengan berapa buah?", "12", ("12 buah", "12")),
    Riddle("Lawan kata (antonim) dari 'Panjang' adalah?", "Pendek", ("pendek",)),
    Riddle("Persamaan kata (sinonim) dari 'Pintar' adalah?", "Pandai", ("pandai", "cerdas")),
    Riddle(
        "Cerita rakyat tentang anak durhaka yang menjadi batu berasal dari Sumatera Barat adalah?",
        "Malin Kundang",
        ("malin kundang",),
    ),
    Riddle("Penulis novel 'Laskar Pelangi' adalah?", "Andrea Hirata", ("andrea hirata",)),
    Riddle("Samudra terluas di dunia adalah?", "Pasifik", ("samudra pasifik", "pasifik")),
    Riddle("Lagu kebangsaan Indonesia adalah?", "Indonesia Raya", ("indonesia raya",)),
    Riddle(
        "Alat musik yang dimainkan dengan cara dipetik, berasal dari Pulau Rote adalah?",
        "Sasando",
        ("sasando",),
    ),
    Riddle("Gunung tertinggi di Pulau Jawa adalah?", "Semeru", ("gunung semeru", "semeru")),
    Riddle("Rumah adat dari Sumatera Barat disebut?", "Rumah Gadang", ("rumah gadang",)),
    Riddle("Semboyan negara Indonesia adalah?", "Bhinneka Tunggal Ika", ("bhinneka tunggal ika",)),
    Riddle("Presiden Indonesia yang ke-3 adalah?", "B.J. Habibie", ("b.j. habibie", "bj habibie", "habibie")),
    Riddle("Zat hijau daun disebut?", "Klorofil", ("klorofil",)),
    Riddle("Satuan untuk mengukur tegangan listrik adalah?", "Volt", ("volt",)),
    Riddle("Angka romawi dari 10 adalah?", "X", ("x",)),
    Riddle("Olahraga yang menggunakan raket dan kok (shuttlecock) adalah?", "Bulu Tangkis", ("bulu tangkis", "badminton")),
    Riddle("Jumlah pemain dalam satu tim sepak bola adalah?", "11", ("11 orang", "11")),
    Riddle("Tari Kecak berasal dari daerah?", "Bali", ("bali",)),
    Riddle("Alat musik Angklung terbuat dari?", "Bambu", ("bambu",)),
    Riddle("Seni melipat kertas dari Jepang disebut?", "Origami", ("origami",)),
)
