"""Rule tables for listing-title normalization.

Everything here is plain data. The normalizer in cards.title_normalizer
walks these tables in order. Regex lists are (pattern, replacement) pairs
applied top to bottom.
"""

from typing import List, Tuple

# ============================================================
# SUMMARY TITLE CLEANUP (ordered, case-insensitive)
# ============================================================

SUMMARY_STRIP_PATTERNS: List[Tuple[str, str]] = [
    # grading terms
    (r"\bPSA\s*\d+(?:\.\d)?\b", ""),
    (r"\bGEM\s*-?\s*MT\b", ""),
    (r"\bGEM\b", ""),
    (r"\bMINT\s*CONDITION\b", ""),
    (r"\bMINT\s*\d+\b", ""),
    (r"\bMINT\b", ""),
    (r"\bCERT\s*#?\s*\d+", ""),
    (r"\bPOP\.?\s*\d+", ""),
    # hype words
    (r"\bBEAUTIFUL\b", ""),
    (r"\bGORGEOUS\b", ""),
    (r"\bSTUNNING\b", ""),
    (r"\bCASE\s*HIT\b", ""),
    (r"\bHOT\s*NUMBERS\b", ""),
    (r"\bELECTRIC\s*ETCH\b", ""),
    (r"\bVITREOUS\b", ""),
    (r"\bICE\s*PRIZM\b", ""),
    (r"\bBOMB\s*SQUAD\b", ""),
    (r"\bON\s*DECK\b", ""),
    # card features
    (r"\b(RC|ROOKIE|AUTO|AUTOGRAPH|REFRACTOR|PARALLEL|NUMBERED|SSP|SP|HOF)\b", ""),
    # sports and leagues
    (r"\b(NBA|BASKETBALL|FOOTBALL|BASEBALL|HOCKEY|SOCCER|NFL|MLB|NHL|FIFA)\b", ""),
    # NBA teams
    (r"\b(LAKERS|WARRIORS|CELTICS|HEAT|KNICKS|NETS|RAPTORS|76ERS|HAWKS|HORNETS|WIZARDS|MAGIC|PACERS|BUCKS|"
     r"CAVALIERS|PISTONS|ROCKETS|MAVERICKS|SPURS|GRIZZLIES|PELICANS|THUNDER|JAZZ|NUGGETS|TIMBERWOLVES|"
     r"TRAIL\s*BLAZERS|KINGS|SUNS|CLIPPERS|BULLS)\b", ""),
    # NFL teams
    (r"\b(COWBOYS|EAGLES|GIANTS|REDSKINS|COMMANDERS|BEARS|PACKERS|VIKINGS|LIONS|FALCONS|PANTHERS|SAINTS|"
     r"BUCCANEERS|RAMS|49ERS|SEAHAWKS|CARDINALS|JETS|PATRIOTS|BILLS|DOLPHINS|BENGALS|BROWNS|STEELERS|RAVENS|"
     r"TEXANS|COLTS|JAGUARS|TITANS|BRONCOS|CHARGERS|RAIDERS|CHIEFS)\b", ""),
    # MLB teams
    (r"\b(YANKEES|RED\s*SOX|BLUE\s*JAYS|ORIOLES|RAYS|WHITE\s*SOX|INDIANS|GUARDIANS|TIGERS|TWINS|ROYALS|ASTROS|"
     r"RANGERS|ATHLETICS|MARINERS|ANGELS|DODGERS|PADRES|ROCKIES|DIAMONDBACKS|BRAVES|MARLINS|METS|PHILLIES|"
     r"NATIONALS|PIRATES|REDS|BREWERS|CUBS)\b", ""),
    # cities
    (r"\b(CHICAGO|BOSTON|NEW\s*YORK|LOS\s*ANGELES|MIAMI|DALLAS|HOUSTON|PHOENIX|DENVER|PORTLAND|SACRAMENTO|"
     r"MINNEAPOLIS|OKLAHOMA\s*CITY|SALT\s*LAKE\s*CITY|MEMPHIS|NEW\s*ORLEANS|SAN\s*ANTONIO|ORLANDO|ATLANTA|"
     r"CHARLOTTE|WASHINGTON|DETROIT|CLEVELAND|INDIANAPOLIS|MILWAUKEE|PHILADELPHIA|BROOKLYN|TORONTO)\b", ""),
]

SEARCH_STRIP_PATTERNS: List[Tuple[str, str]] = [
    (r"\bpsa\s*\d+(?:\.\d)?\b", ""),
    (r"\bgem\s*mt\b", ""),
    (r"\bmint\s*\d+\b", ""),
    (r"\bautograph\b", ""),
    (r"\b(rookie|rc|auto|refractor|parallel|numbered)\b", ""),
]

# ============================================================
# PLAYER NAME EXTRACTION
# ============================================================

GRADING_PATTERNS: List[Tuple[str, str]] = [
    (r"\b(psa|bgs|sgc|cgc|csg|hga|bvg)\s*-?\s*\d{1,2}(?:\.5)?\b", " "),
    (r"\bgem\s*-?\s*mi?n?t\b", " "),
    (r"\bmint\s*\d+\b", " "),
    (r"\bmt\s*\d+\b", " "),
    (r"\bcert(?:ificate)?\s*#?\s*\d+", " "),
    (r"\bpop(?:ulation)?\.?\s*\d+", " "),
    (r"\b(graded|ungraded)\b", " "),
]

NUMBER_PATTERNS: List[Tuple[str, str]] = [
    (r"\b(?:19|20)\d{2}(?:-\d{2,4})?\b", " "),      # years and season ranges
    (r"#\s*[A-Za-z0-9\-]+", " "),                     # card numbers and codes
    (r"\bno\.?\s*\d{1,4}[a-z]?\b", " "),              # vintage "No. 311"
    (r"\b\d+\s*/\s*\d+\b", " "),                      # 12/99
    (r"/\s*\d+\b", " "),                              # /99
    (r"\b\d{1,2}(?:st|nd|rd|th)\b", " "),             # 1st, 2nd
    (r"\b\d+\b", " "),                                # bare numbers
]

# Multi-word phrases are removed as phrases before single-word filtering.
SPORT_TERMS = [
    "football", "basketball", "baseball", "hockey", "soccer", "golf", "racing",
    "wrestling", "mma", "ufc", "nfl", "nba", "mlb", "nhl", "wnba", "fifa", "pga",
    "wwe", "wwf", "formula 1", "formula1", "f1", "olympics", "usa basketball",
    "usa football", "usa baseball", "pokemon", "league", "championship", "tournament",
]

CARD_BRAND_TERMS = [
    "bowman draft chrome 1st", "bowman chrome draft", "bowman chrome sapphire",
    "bowman university chrome", "bowman chrome", "bowman draft", "bowman sterling",
    "bowman platinum", "bowman university", "panini donruss optic", "panini donruss",
    "panini prizm", "panini select", "panini contenders", "panini optic",
    "topps chrome", "topps finest", "topps heritage", "topps archives", "topps update",
    "upper deck", "stadium club", "national treasures", "allen & ginter", "allen and ginter",
    "gypsy queen", "big league", "opening day", "crown royale", "totally certified",
    "rookies & stars", "press pass", "rated rookie", "rated rookies", "young guns",
    "topps", "panini", "donruss", "bowman", "fleer", "score", "leaf", "playoff", "sage",
    "pacific", "skybox", "flair", "chronicles", "contenders", "prizm", "optic", "mosaic",
    "select", "heritage", "finest", "chrome", "immaculate", "flawless", "obsidian",
    "spectra", "phoenix", "playbook", "momentum", "threads", "prestige", "certified",
    "absolute", "elite", "hoops", "origins", "gallery", "archives", "update", "series",
    "sterling", "exquisite", "spx", "university", "draft", "prospect", "prospects",
    "sapphire", "impact", "zenith", "revolution", "illusions", "luminance",
]

PARALLEL_TERMS = [
    "silver prizm", "gold prizm", "green prizm", "blue prizm", "red prizm", "purple prizm",
    "orange prizm", "pink prizm", "black prizm", "mojo prizm", "cracked ice", "stained glass",
    "color blast", "printing plate", "printing plates", "x-fractor", "xfractor", "superfractor",
    "refractor", "die-cut", "die cut", "dragon scale", "tie-dye", "fast break", "red white blue",
    "red/white/blue", "hyper pink", "neon green", "sky blue", "vintage stock", "black border",
    "independence day", "father's day", "mother's day", "memorial day",
    "gold", "silver", "bronze", "platinum", "black", "white", "red", "blue", "green",
    "yellow", "orange", "purple", "pink", "teal", "aqua", "lime", "magenta", "fuchsia",
    "holo", "holographic", "foil", "foilboard", "shimmer", "mojo", "wave", "pulsar",
    "disco", "laser", "lazer", "scope", "velocity", "hyper", "neon", "camo", "snakeskin",
    "atomic", "checkerboard", "speckle", "sparkle", "rainbow", "crackle", "ice", "flash",
    "shock", "genesis", "reactive", "parallel", "variation", "numbered", "limited",
]

FEATURE_TERMS = [
    "rookie card", "short print", "super short print", "first bowman", "1st bowman",
    "case hit", "case-hit", "case hits", "on card", "game used", "game-used",
    "rookie", "rookies", "rc", "auto", "autos", "autograph", "autographs", "autographed",
    "signed", "signature", "au", "jersey", "patch", "relic", "memorabilia", "base",
    "insert", "ssp", "sp", "hof", "1st", "first", "debut", "yg", "rpa", "mvp", "logo",
    "card", "cards", "edition", "psa", "bgs", "sgc", "cgc", "beckett", "gem", "mint",
    "mt", "nm", "near mint", "cert", "pop", "hit", "case", "lot", "invest", "hot",
    "beautiful", "gorgeous", "stunning", "rare", "sharp", "clean", "ref", "tf1",
    "now", "preview", "promo", "sample",
]

TEAM_TERMS = [
    # multi-word teams first
    "trail blazers", "red sox", "white sox", "blue jays", "blue jackets", "red wings",
    "maple leafs", "golden knights", "golden state", "green bay", "tampa bay",
    "kansas city", "las vegas", "st. louis", "st louis",
    # NFL
    "cardinals", "falcons", "ravens", "bills", "panthers", "bears", "bengals", "browns",
    "cowboys", "broncos", "lions", "packers", "texans", "colts", "jaguars", "chiefs",
    "raiders", "chargers", "rams", "dolphins", "vikings", "patriots", "saints", "giants",
    "jets", "eagles", "steelers", "49ers", "seahawks", "buccaneers", "titans",
    "commanders", "redskins",
    # MLB
    "yankees", "orioles", "rays", "indians", "guardians", "tigers", "twins", "royals",
    "astros", "rangers", "athletics", "mariners", "angels", "dodgers", "padres",
    "rockies", "diamondbacks", "braves", "marlins", "mets", "phillies", "nationals",
    "pirates", "reds", "brewers", "cubs",
    # NBA
    "lakers", "warriors", "celtics", "heat", "knicks", "nets", "raptors", "76ers",
    "hawks", "hornets", "wizards", "magic", "pacers", "bucks", "cavaliers", "pistons",
    "rockets", "mavericks", "spurs", "grizzlies", "pelicans", "thunder", "jazz",
    "nuggets", "timberwolves", "kings", "suns", "clippers", "bulls", "sky", "fever",
    "aces", "liberty",
    # NHL
    "ducks", "coyotes", "bruins", "sabres", "flames", "hurricanes", "blackhawks",
    "avalanche", "oilers", "wild", "canadiens", "predators", "devils", "islanders",
    "senators", "flyers", "penguins", "sharks", "kraken", "blues", "lightning",
    "canucks", "capitals",
    # college
    "longhorns", "buffaloes", "crimson tide", "buckeyes", "wolverines", "bulldogs",
    "wildcats", "gators", "seminoles", "tar heels", "blue devils",
]

# Cities that double as common given names or surnames stay out of this list.
CITY_TERMS = [
    "new york", "los angeles", "san antonio", "san diego", "san francisco", "san jose",
    "oklahoma city", "salt lake city", "new orleans", "new jersey",
    "chicago", "houston", "phoenix", "philadelphia", "dallas", "jacksonville",
    "columbus", "charlotte", "indianapolis", "seattle", "denver", "washington",
    "boston", "nashville", "detroit", "portland", "memphis", "louisville",
    "baltimore", "milwaukee", "sacramento", "atlanta", "miami", "minneapolis",
    "cleveland", "tampa", "pittsburgh", "cincinnati", "buffalo", "toronto",
    "montreal", "vancouver", "calgary", "edmonton", "winnipeg", "ottawa", "brooklyn",
    "anaheim", "oakland", "minnesota", "arizona", "colorado", "carolina", "tennessee",
    "texas", "utah", "indiana", "florida", "vegas",
]

DESCRIPTION_TERMS = [
    "storm chasers", "storm-chasers", "winning ticket", "helmet heroes", "main event",
    "road to uefa", "go hard go home", "color wheel", "career stat line",
    "supernatural", "explosive", "vision", "design", "color", "pitching", "catching",
    "batting", "concourse", "essentials", "overdrive", "royalty", "huddle", "tectonic",
    "radiant", "focus", "stadium", "club", "collection", "japanese", "stormfront",
    "aquapolis", "sword", "shield", "composite", "premium", "kaboom", "downtown",
    "uptown", "uptowns", "starcade", "fireworks", "lunar", "sun", "the", "of", "and",
    "with", "in", "new", "usa", "euro", "liv",
]

# Bowman and Panini numbering prefixes that survive the "#code" pass.
CODE_PATTERNS: List[str] = [
    r"\b(bdc|bdp|bcp|cpa|cda|mmr|rps|bs|tc|dt)-?\d*\b",
    r"\b[a-z]{1,3}\d{2,}[a-z]?\b",
    r"\b\d+[a-z]{1,3}\b",
]

# Words that look like card terms but are real names.
TERMS_TO_KEEP = {"wayne", "gretzky", "aaron"}

NAME_PARTICLES = {"de", "la", "del", "della", "van", "von", "da", "dos", "st", "st.", "le"}
NAME_SUFFIXES = {"jr", "jr.", "sr", "sr.", "ii", "iii", "iv"}

# Two-letter given names written as initials.
INITIALS = {"aj", "bj", "cj", "dj", "jj", "jt", "kj", "pj", "rj", "tj", "cc", "dk", "jd", "jk"}

# ============================================================
# TARGETED FIXES (applied to an extracted name)
# ============================================================

PREFIX_FIXES = [
    "wwe", "wwf", "formula", "f1", "wnba", "nba", "nfl", "mlb", "nhl", "soccer",
    "fifa", "pga", "ufc", "mma", "pokemon",
]

SUFFIX_FIXES = [
    "salt lake city", "oklahoma city", "new york", "los angeles", "new orleans",
    "san antonio", "las vegas", "st louis", "kansas city", "tampa bay",
    "chicago", "detroit", "denver", "miami", "boston", "dallas", "houston",
    "phoenix", "portland", "sacramento", "minneapolis", "memphis", "atlanta",
    "charlotte", "washington", "cleveland", "indianapolis", "milwaukee",
    "philadelphia", "brooklyn", "toronto", "montreal", "vancouver", "calgary",
    "edmonton", "winnipeg", "ottawa", "seattle", "nashville", "pittsburgh",
    "cincinnati", "baltimore", "jacksonville", "carolina", "arizona", "tennessee",
    "colorado",
    "supernatural", "pitching", "catching", "new", "color", "design", "vision",
    "explosive", "buffaloes", "usa", "big", "club", "liv", "euro", "heritage",
    "collection", "overdrive", "royalty", "hoops", "concourse", "huddle", "speckle",
    "color blast", "tectonic", "premium box set", "winning ticket", "focus", "stadium",
    "checkerboard", "radiant", "storm chasers", "storm-chasers", "case hit", "case-hit",
    "case hits", "case-hits", "japanese", "composite",
]

# ============================================================
# SPORT DETECTION (first matching group wins)
# ============================================================

SPORT_KEYWORDS: List[Tuple[str, List[str]]] = [
    ("Pokemon", [
        "pokemon", "pokémon", "pikachu", "charizard", "moltres", "zapdos", "articuno", "gx", "sm210",
    ]),
    ("Racing", [
        "f1", "formula 1", "lando norris", "mclaren", "racing", "grand prix", "nascar",
    ]),
    ("Football", [
        "football", "nfl", "qb", "quarterback", "running back", "wide receiver", "tight end",
        "linebacker", "bears", "packers", "cowboys", "patriots", "steelers", "49ers", "chiefs",
        "caleb williams", "drake maye", "bo nix", "patrick mahomes", "josh allen", "joe burrow",
        "justin herbert", "lamar jackson", "jalen hurts", "dak prescott", "aaron rodgers",
        "tom brady", "christian mccaffrey", "saquon barkley", "derrick henry", "tyreek hill",
        "justin jefferson", "jamarr chase", "ja'marr chase", "cj stroud", "c.j. stroud",
        "jayden daniels", "malik nabers", "brock bowers", "bijan robinson", "brock purdy",
        "marvin harrison", "xavier worthy", "jj mccarthy", "bryce young", "trevor lawrence",
    ]),
    ("Basketball", [
        "basketball", "nba", "wnba", "lakers", "celtics", "bulls", "warriors", "knicks",
        "point guard", "shooting guard", "small forward", "power forward", "orlando magic",
        "lebron james", "stephen curry", "kevin durant", "giannis", "nikola jokic", "luka doncic",
        "victor wembanyama", "wembanyama", "ja morant", "zion williamson", "anthony edwards",
        "cooper flagg", "caitlin clark", "shaquille o'neal", "shaq", "michael jordan",
        "kobe bryant", "stephon castle", "paolo banchero", "chet holmgren",
    ]),
    ("Baseball", [
        "baseball", "mlb", "pitcher", "outfielder", "infielder", "shortstop", "dodgers",
        "yankees", "red sox", "cubs", "giants", "cardinals", "shohei ohtani", "ohtani",
        "gunnar henderson", "elly de la cruz", "mike trout", "bryce harper", "ronald acuna",
        "juan soto", "aaron judge", "paul skenes", "jackson holliday", "jackson merrill",
        "julio rodriguez", "corbin carroll", "wyatt langford", "dylan crews", "bowman chrome",
        "1st bowman",
    ]),
    ("Hockey", [
        "hockey", "nhl", "goalie", "goaltender", "defenseman", "blackhawks", "bruins",
        "young guns", "connor mcdavid", "sidney crosby", "alex ovechkin", "auston matthews",
        "connor bedard", "wayne gretzky",
    ]),
    ("Soccer", [
        "soccer", "fifa", "premier league", "uefa", "manchester", "barcelona", "real madrid",
        "lionel messi", "messi", "cristiano ronaldo", "kylian mbappe", "erling haaland",
        "jude bellingham", "lamine yamal",
    ]),
    ("Yu-Gi-Oh", ["yugioh", "yu-gi-oh"]),
    ("Magic", ["magic the gathering", "mtg", "magic"]),
]

# ============================================================
# BRAND / SET (first matching needle wins)
# ============================================================

BRAND_SET_TABLE: List[Tuple[str, str, str]] = [
    ("topps chrome", "Topps", "Chrome"),
    ("topps heritage", "Topps", "Heritage"),
    ("topps stadium club", "Topps", "Stadium Club"),
    ("topps allen & ginter", "Topps", "Allen & Ginter"),
    ("topps gypsy queen", "Topps", "Gypsy Queen"),
    ("topps finest", "Topps", "Finest"),
    ("topps fire", "Topps", "Fire"),
    ("topps opening day", "Topps", "Opening Day"),
    ("topps big league", "Topps", "Big League"),
    ("topps", "Topps", "Base"),
    ("panini prizm", "Panini", "Prizm"),
    ("panini select", "Panini", "Select"),
    ("panini mosaic", "Panini", "Mosaic"),
    ("panini optic", "Panini", "Optic"),
    ("panini immaculate", "Panini", "Immaculate"),
    ("panini national treasures", "Panini", "National Treasures"),
    ("panini flawless", "Panini", "Flawless"),
    ("panini obsidian", "Panini", "Obsidian"),
    ("panini", "Panini", "Base"),
    ("donruss optic", "Donruss", "Optic"),
    ("donruss", "Donruss", "Base"),
    ("bowman chrome", "Bowman", "Chrome"),
    ("bowman", "Bowman", "Base"),
    ("upper deck", "Upper Deck", "Base"),
    ("fleer", "Fleer", "Base"),
]

# Parallel descriptors used for the summary title's card_type slot.
PARALLEL_PHRASES = [
    "gold vinyl", "silver prizm", "gold prizm", "green prizm", "blue prizm", "red prizm",
    "purple prizm", "orange prizm", "black prizm", "pink prizm", "mojo prizm",
    "gold refractor", "blue refractor", "green refractor", "orange refractor",
    "purple refractor", "red refractor", "black refractor", "sapphire refractor",
    "x-fractor", "xfractor", "superfractor", "cracked ice", "color blast", "stained glass",
    "printing plate", "refractor", "silver", "gold", "holo", "shimmer", "mojo", "wave",
    "pulsar", "disco", "laser", "scope", "hyper", "neon", "camo", "snakeskin", "atomic",
    "sapphire",
]
