"""
Static asset lists for the trading universe.

Canonical (Yahoo-style) symbols grouped by category. Duplicates across
lists are removed when the universe is built.
"""

from typing import Dict, List

CRYPTO_SYMBOLS: List[str] = [
    'BTC-USD', 'ETH-USD', 'BNB-USD', 'XRP-USD', 'SOL-USD', 'ADA-USD', 'DOGE-USD', 'AVAX-USD', 'DOT-USD', 'MATIC-USD',
    'LINK-USD', 'SHIB-USD', 'LTC-USD', 'ATOM-USD', 'UNI-USD', 'XLM-USD', 'NEAR-USD', 'APT-USD', 'OP-USD', 'ARB-USD',
    'FIL-USD', 'HBAR-USD', 'ICP-USD', 'VET-USD', 'AAVE-USD', 'MKR-USD', 'GRT-USD', 'INJ-USD', 'RUNE-USD', 'FTM-USD',
]


FOREX_SYMBOLS: List[str] = [
    'EURUSD=X', 'GBPUSD=X', 'USDJPY=X', 'USDCHF=X', 'AUDUSD=X', 'USDCAD=X', 'NZDUSD=X', 'EURGBP=X', 'EURJPY=X', 'GBPJPY=X',
    'AUDJPY=X', 'CADJPY=X', 'EURAUD=X', 'EURCHF=X', 'GBPCHF=X', 'USDMXN=X', 'USDZAR=X', 'USDTRY=X', 'USDINR=X', 'USDCNY=X',
]


FUTURES_SYMBOLS: List[str] = [
    'ES=F', 'NQ=F', 'YM=F', 'RTY=F', 'GC=F', 'SI=F', 'CL=F', 'BZ=F', 'NG=F', 'HG=F',
    'PL=F', 'ZC=F', 'ZW=F', 'ZS=F', 'ZB=F', 'ZN=F', '6E=F', '6B=F', '6J=F',
]


SP500_SYMBOLS: List[str] = [
    'NVDA', 'AAPL', 'MSFT', 'AMZN', 'GOOGL', 'GOOG', 'META', 'AVGO', 'TSLA', 'BRK-B',
    'LLY', 'WMT', 'JPM', 'V', 'XOM', 'JNJ', 'ORCL', 'MA', 'MU', 'COST',
    'AMD', 'PLTR', 'ABBV', 'HD', 'BAC', 'NFLX', 'PG', 'CVX', 'UNH', 'KO',
    'GE', 'CSCO', 'CAT', 'MS', 'GS', 'LRCX', 'IBM', 'PM', 'WFC', 'MRK',
    'RTX', 'AMAT', 'AXP', 'TMO', 'INTC', 'MCD', 'CRM', 'LIN', 'TMUS', 'KLAC',
    'C', 'PEP', 'BA', 'DIS', 'ABT', 'ISRG', 'AMGN', 'APH', 'SCHW', 'GEV',
    'APP', 'NEE', 'TXN', 'BLK', 'ACN', 'ANET', 'UBER', 'TJX', 'GILD', 'T',
    'VZ', 'QCOM', 'DHR', 'BKNG', 'SPGI', 'INTU', 'LOW', 'ADI', 'PFE', 'HON',
    'NOW', 'DE', 'BSX', 'LMT', 'UNP', 'COF', 'SYK', 'NEM', 'MDT', 'ETN',
    'WELL', 'PANW', 'ADBE', 'COP', 'PGR', 'VRTX', 'CB', 'PLD', 'PH', 'BX',
    'CRWD', 'BMY', 'SBUX', 'KKR', 'HCA', 'CMCSA', 'CVS', 'CEG', 'ADP', 'MO',
    'CME', 'MCK', 'ICE', 'GD', 'SO', 'NKE', 'HOOD', 'NOC', 'SNPS', 'MCO',
    'WM', 'UPS', 'DUK', 'MRSH', 'DASH', 'PNC', 'FCX', 'CDNS', 'HWM', 'SHW',
    'MMM', 'USB', 'MAR', 'TT', 'ORLY', 'AMT', 'EMR', 'ELV', 'CRH', 'BK',
    'WDC', 'ABNB', 'TDG', 'MNST', 'GLW', 'ECL', 'WMB', 'REGN', 'APO', 'CMI',
    'RCL', 'EQIX', 'CTAS', 'DELL', 'STX', 'MDLZ', 'ITW', 'CI', 'GM', 'SLB',
    'AON', 'FDX', 'WBD', 'PWR', 'CL', 'JCI', 'HLT', 'COR', 'CSX', 'RSG',
    'CVNA', 'MSI', 'LHX', 'KMI', 'TEL', 'AJG', 'NSC', 'PCAR', 'TFC', 'AEP',
    'AZO', 'ROST', 'FTNT', 'TRV', 'SPG', 'EOG', 'NXPI', 'COIN', 'URI', 'APD',
    'BDX', 'ADSK', 'VLO', 'PSX', 'AFL', 'SRE', 'NDAQ', 'O', 'IDXX', 'DLR',
    'ZTS', 'VST', 'CMG', 'F', 'BKR', 'PYPL', 'MPC', 'EA', 'MPWR', 'D',
    'AME', 'ALL', 'FAST', 'CBRE', 'GWW', 'MET', 'WDAY', 'PSA', 'CAH', 'OKE',
    'TGT', 'AXON', 'EW', 'CTVA', 'CARR', 'ROK', 'AMP', 'DDOG', 'TTWO', 'EXC',
    'DAL', 'XEL', 'MSCI', 'FANG', 'ROP', 'DHI', 'OXY', 'YUM', 'EL', 'EBAY',
    'ETR', 'NUE', 'TRGP', 'KR', 'CTSH', 'LVS', 'MCHP', 'CPRT', 'IQV', 'GRMN',
    'VMC', 'FIX', 'WAB', 'MLM', 'PEG', 'AIG', 'HSY', 'A', 'PAYX', 'KDP',
    'CCI', 'PRU', 'ED', 'CCL', 'RMD', 'FICO', 'KEYS', 'SYY', 'ODFL', 'FISV',
    'GEHC', 'VTR', 'TER', 'HIG', 'WEC', 'OTIS', 'STT', 'UAL', 'EQT', 'IBKR',
    'IR', 'XYL', 'ARES', 'LYV', 'KVUE', 'KMB', 'ACGL', 'FITB', 'RJF', 'EXPE',
    'MTB', 'PCG', 'ADM', 'DG', 'HUM', 'FIS', 'EME', 'WTW', 'VICI', 'ULTA',
    'VRSK', 'ROL', 'EXR', 'CBOE', 'TSCO', 'MTD', 'TDY', 'NRG', 'HAL', 'DXCM',
    'DOV', 'HPE', 'DTE', 'CSGP', 'NTRS', 'IRM', 'LEN', 'SYF', 'STZ', 'KHC',
    'HBAN', 'BRO', 'FE', 'CFG', 'PPL', 'ATO', 'TPR', 'STLD', 'ES', 'EXE',
    'FSLR', 'HUBB', 'JBL', 'EFX', 'DLTR', 'WRB', 'STE', 'CNP', 'AWK', 'AVB',
    'PPG', 'BIIB', 'VLTO', 'OMC', 'ON', 'CHTR', 'CINF', 'LDOS', 'WSM', 'PHM',
    'DVN', 'BR', 'TPL', 'RF', 'GIS', 'DRI', 'EQR', 'EIX', 'WAT', 'KEY',
    'VRSN', 'TROW', 'SW', 'IP', 'CNC', 'CPAY', 'LULU', 'ALB', 'RL', 'CHD',
    'LH', 'BG', 'TSN', 'LUV', 'CMS', 'EXPD', 'GPN', 'L', 'NVR', 'CTRA',
    'CHRW', 'NI', 'AMCR', 'PKG', 'DGX', 'DOW', 'PFG', 'INCY', 'SBAC', 'JBHT',
    'NTAP', 'PTC', 'WY', 'SNA', 'GPC', 'PODD', 'MRNA', 'SMCI', 'IFF', 'TYL',
    'DD', 'LII', 'HPQ', 'TTD', 'PNR', 'EVRG', 'FTV', 'LNT', 'ZBH', 'WST',
    'TRMB', 'HOLX', 'TXT', 'INVH', 'APTV', 'HII', 'LYB', 'CDW', 'ESS', 'MKC',
    'J', 'TKO', 'COO', 'MAA', 'GEN', 'FOX', 'BALL', 'VTRS', 'FOXA', 'NDSN',
    'FFIV', 'IEX', 'AES', 'ALGN', 'AOS', 'ARE', 'AWI', 'BAX', 'BBWI', 'BEN',
    'BWA', 'CAG', 'CE', 'CF', 'CPB', 'CPT', 'CRL', 'CZR', 'DAY', 'DECK',
    'DFS', 'DPZ', 'ENPH', 'EPAM', 'ERIE', 'ETSY', 'FBIN', 'FDS', 'FFBC', 'FMC',
    'FRT', 'GDDY', 'GL', 'GNRC', 'HAS', 'HSIC', 'HST', 'HRL', 'HWE', 'IPG',
    'IVZ', 'JKHY', 'K', 'KIM', 'KMX', 'LEG', 'LEVI', 'LPLA', 'LW', 'MAS',
    'MGM', 'MHK', 'MKTX', 'MOH', 'MOS', 'MRO', 'MTCH', 'MTN', 'NCLH', 'NWS',
    'NWSA', 'PAYC', 'PEAK', 'PENN', 'POOL', 'REG', 'RVTY', 'SJM', 'SPB', 'SWKS',
    'TAP', 'TECH', 'TFX', 'TFS', 'TPH', 'UDR', 'UHS', 'UTHR', 'VFC', 'WYNN',
    'XPO', 'ZS',
]


ETF_SYMBOLS: List[str] = [
    'SPY', 'QQQ', 'IWM', 'DIA', 'VTI', 'VOO', 'VEA', 'VWO', 'EFA', 'EEM',
    'AGG', 'BND', 'LQD', 'HYG', 'TLT', 'IEF', 'SHY', 'TIP', 'GLD', 'SLV',
    'USO', 'UNG', 'XLF', 'XLK', 'XLE', 'XLV', 'XLI', 'XLP', 'XLY', 'XLU',
    'XLB', 'XLRE', 'XLC', 'VNQ', 'ARKK', 'ARKW', 'ARKG', 'ARKF', 'SMH', 'SOXX',
    'IBB', 'XBI', 'KRE', 'KBE', 'XHB', 'ITB', 'HACK', 'BOTZ', 'ROBO', 'KWEB',
    'FXI', 'EWJ', 'EWZ', 'EWY', 'INDA', 'RSX', 'VGK', 'IEMG', 'SCHD', 'VIG',
    'DGRO', 'DVY', 'HDV', 'VYM', 'NOBL', 'MTUM', 'QUAL', 'VLUE', 'SIZE', 'USMV',
]


NASDAQ_ADDITIONAL: List[str] = [
    'MELI', 'TEAM', 'LCID', 'RIVN', 'OKTA', 'ZM', 'DOCU', 'ROKU', 'NET', 'CRSP',
    'ASML', 'MRVL', 'PDD', 'JD', 'BIDU', 'NTES', 'TCOM', 'SOFI', 'UPST', 'AFRM',
    'PATH', 'SNOW', 'DKNG', 'RBLX', 'U', 'BILL', 'HUBS', 'TWLO', 'MDB', 'CFLT',
    'GTLB', 'S', 'DUOL', 'PINS', 'SNAP', 'SPOT', 'LYFT', 'GRAB', 'SE', 'SHOP',
    'SQ', 'FUBO', 'BNTX', 'NVAX', 'SGEN', 'EXAS', 'ALNY', 'SRPT', 'RARE', 'BMRN',
    'NBIX', 'IONS', 'HALO', 'LEGN', 'PCVX', 'KRYS', 'ARWR', 'BGNE', 'VXRT', 'INO',
    'SAVA', 'MGNX', 'NTLA', 'EDIT', 'BEAM', 'PRTA', 'VCNX', 'IMVT', 'CCCC', 'RCKT',
    'RVNC', 'FATE', 'GTHX', 'FOLD', 'APLS', 'DCPH', 'ROIV', 'XNCR', 'ARQT', 'KROS',
    'ARVN', 'CYTK', 'DAWN', 'EWTX', 'HLVX', 'IMCR', 'INSM', 'ITCI', 'LGND', 'MDGL',
    'MIRM', 'NUVB', 'PTCT', 'RGNX', 'RCUS', 'SRRK', 'VCEL', 'VKTX', 'VRNA', 'XENE',
    'ZLAB', 'ACAD', 'AGEN', 'AKRO', 'ANAB', 'ARDX', 'AUPH', 'BBIO', 'CLDX', 'CPRX',
    'DVAX', 'ENTA', 'EXEL', 'FGEN', 'GERN', 'HRTX', 'IMGN', 'IOVA', 'IRWD', 'JAZZ',
    'KURA', 'MCRB', 'NKTX', 'OLINK', 'PRAX', 'SAGE', 'TGTX', 'TVTX', 'VCYT', 'XERS',
    'ARM', 'IONQ', 'RGTI', 'AI', 'SOUN', 'BBAI', 'UPWK', 'FVRR', 'WIX', 'ZI',
    'ESTC', 'NEWR', 'ASAN', 'MNDY', 'DOCN', 'FSLY', 'AKAM', 'DBX', 'BOX', 'SPLK',
    'DOMO', 'YEXT', 'ZUO', 'APPN', 'BIGC', 'COUP', 'FROG', 'NCNO', 'QLYS', 'TENB',
    'VRNS', 'ZEN', 'CRDO', 'CWAN', 'DLO', 'ENVX', 'GCT', 'GENI', 'IOT', 'LSPD',
    'MGNI', 'NXST', 'PAYO', 'PRFT', 'PSTG', 'QLGN', 'RPD', 'SMAR', 'SPSC', 'TASK',
    'TDOC', 'TTEC', 'VERX', 'VTEX', 'WEAV', 'WK', 'YOU', 'ZETA', 'BASE', 'BRZE',
    'CRNC', 'DV', 'EVTC', 'FRSH', 'INFA', 'JAMF', 'LSCC', 'MANH', 'NTNX', 'PCOR',
    'PEGA', 'PLAN', 'RELY', 'SEMR', 'TOST', 'WULF', 'XPRO', 'APGE', 'AVPT', 'CLSK',
    'COTY', 'CPRT', 'WOLF', 'ACLS', 'ALGM', 'AMKR', 'AOSL', 'ASPN', 'ATOM', 'AXTI',
    'CAMT', 'CRUS', 'DIOD', 'FORM', 'INDI', 'IPGP', 'ISSI', 'ITOS', 'KLIC', 'LEDS',
    'LITE', 'MASI', 'MKSI', 'MTSI', 'NOVT', 'NXPI', 'OLED', 'ONTO', 'PLAB', 'POWI',
    'QRVO', 'RMBS', 'SITM', 'SLAB', 'SMTC', 'SYNA', 'TER', 'UCTT', 'VECO', 'VIAV',
    'VSH', 'WRAP', 'FIVE', 'OLLI', 'RH', 'W', 'CHWY', 'CPNG', 'BABA', 'BGFV',
    'BIRD', 'BOOT', 'BROS', 'CAKE', 'CARS', 'CASA', 'CATO', 'CONN', 'COUR', 'CURV',
    'EAT', 'ELF', 'EVRI', 'FIZZ', 'FOXF', 'FRPT', 'FTDR', 'GOOS', 'GPRO', 'HAIN',
    'HIBB', 'HZO', 'IMKTA', 'JACK', 'LANC', 'LCUT', 'LEVI', 'LOVE', 'MCBC', 'MED',
    'MNST', 'NATH', 'NCLH', 'ONON', 'ORLY', 'PTON', 'REAL', 'RMNI', 'SABR', 'SAVE',
    'SCVL', 'SHAK', 'SITE', 'SFIX', 'SKYW', 'SNBR', 'SPTN', 'SSYS', 'STNE', 'SWBI',
    'TACO', 'TAST', 'TNET', 'TRIP', 'TXRH', 'VIR', 'VRNT', 'VSCO', 'WINA', 'WING',
    'WOOF', 'WW', 'YELP', 'YETI', 'NIO', 'XPEV', 'LI', 'FSR', 'GOEV', 'WKHS',
    'HYLN', 'CHPT', 'BLNK', 'EVGO', 'QS', 'PLUG', 'FCEL', 'BE', 'SEDG', 'RUN',
    'ARRY', 'BLDP', 'CLNE', 'EVEX', 'FLNC', 'FREY', 'GEVO', 'HYZN', 'LEV', 'LILM',
    'MVST', 'NKLA', 'NOVA', 'OUST', 'PTRA', 'REE', 'RMO', 'SHLS', 'SLDP', 'SPWR',
    'STEM', 'VLD', 'XL', 'AEHR', 'AMPX', 'AMPS', 'ARBE', 'ARVL', 'BEEM', 'CALX',
    'DRIV', 'EOSE', 'FFIE', 'FUV', 'LAZR', 'MULN', 'PLTK', 'PODD', 'PRCH', 'MSTR',
    'VIRT', 'ALLY', 'AX', 'BFAM', 'BL', 'BSIG', 'CACC', 'CASH', 'CBSH', 'CFFN',
    'COOP', 'CUBI', 'CWCO', 'CZFS', 'DCOM', 'DFIN', 'DNLI', 'ENVA', 'ESNT', 'EQBK',
    'FBIZ', 'FCBP', 'FCNCA', 'FFIC', 'FISI', 'FMBH', 'FNLC', 'FRHC', 'FRME', 'FSBW',
    'GBCI', 'GNW', 'HFWA', 'HOPE', 'HTLF', 'IBTX', 'INBK', 'INDB', 'ITIC', 'KREF',
    'LADR', 'LC', 'LMND', 'LOAN', 'LPRO', 'LX', 'MCBS', 'MKTW', 'ML', 'NBHC',
    'NCR', 'NWBI', 'NYCB', 'OZK', 'PACW', 'PATK', 'PFSI', 'PNFP', 'PRDO', 'PRSP',
    'RKT', 'RILY', 'SBNY', 'SIVB', 'SLQT', 'SNEX', 'SYF', 'TFSL', 'TREE', 'TRUP',
    'UBSI', 'UFPI', 'VBTX', 'VLY', 'VRTS', 'WABC', 'WAFD', 'WAL', 'WBS', 'WRLD',
    'WSBC', 'WTBA', 'WTFC', 'PARA', 'BMBL', 'ATVI', 'CARG', 'CHDN', 'CNK', 'CPRI',
    'CROX', 'CWST', 'DXPE', 'EYE', 'FOSL', 'GIII', 'GRPN', 'HAFC', 'HLI', 'IMAX',
    'INSW', 'LAUR', 'LINC', 'LIND', 'LNW', 'LPTH', 'LSXMA', 'LSXMK', 'MARA', 'NAVI',
    'NXGN', 'OPRA', 'PENN', 'PLYA', 'PRGS', 'QNST', 'RCII', 'RIOT', 'SIRI', 'SONO',
    'SPHR', 'STAA', 'STRA', 'STRR', 'TARS', 'TME', 'TRMK', 'TUYA', 'WMG', 'WWE',
    'XMTR', 'ZUMZ', 'LUMN', 'FYBR', 'USM', 'SATS', 'GSAT', 'IRDM', 'ASTS', 'BAND',
    'BCOV', 'CCOI', 'CIEN', 'CIIG', 'CLFD', 'CNSL', 'COMM', 'CRNT', 'CTL', 'DZSI',
    'EXTR', 'GILT', 'GOGO', 'HLIT', 'IDCC', 'INFN', 'INSG', 'LILA', 'LILAK', 'LTRX',
    'LUMEN', 'MAXR', 'MTCR', 'NTGR', 'OOMA', 'PDCO', 'RBBN', 'RDWR', 'SIFY', 'SWIR',
    'TZOO', 'UBNT', 'UI', 'UTI', 'VSAT', 'WSTC', 'ZGID', 'SAIA', 'LSTR', 'WERN',
    'KNX', 'SNDR', 'AAWW', 'ABUS', 'ACHC', 'ACLE', 'ACMR', 'AEIS', 'AGYS', 'AIMC',
    'ALEX', 'ALGT', 'AMRC', 'AMSC', 'AMWD', 'ANGI', 'ANIP', 'APEI', 'APOG', 'ARCB',
    'ARGO', 'AROC', 'ATEC', 'ATGE', 'ATLC', 'ATNI', 'AVAV', 'AVID', 'AXGN', 'AY',
    'AZPN', 'BANF', 'BCO', 'BECN', 'BJRI', 'BKNG', 'BLD', 'BLDR', 'BLX', 'BMI',
    'BRP', 'BRSP', 'CALM', 'CASY', 'CBZ', 'CDNA', 'CFX', 'CGNX', 'CHCO', 'CHE',
    'CHTR', 'CIR', 'CLAR', 'CLBK', 'CMCO', 'CMT', 'COHU', 'COLM', 'CPSI', 'CRAI',
    'CRI', 'CSL', 'CSOD', 'CVCO', 'CVLT', 'CYRX', 'DAN', 'DENN', 'DGII', 'DHC',
    'DLB', 'DNKN', 'DOOR', 'DY', 'ECHO', 'EEFT', 'EGBN', 'EHTH', 'EIGI', 'ENSG',
    'EQH', 'ESE', 'ESGR', 'ETON', 'EVTV', 'EXLS', 'EXPO', 'FA', 'FARO', 'FCFS',
    'FCN', 'FHN', 'FIGS', 'FLGT', 'FLO', 'FLWS', 'FMAO', 'FN', 'FNKO', 'FNV',
    'FRO', 'FRPH', 'FTI', 'FWRD', 'GBX', 'GDOT', 'GFF', 'GLBE', 'GLDD', 'GLNG',
    'GLOB', 'GLPI', 'GLW', 'GNTX', 'GO', 'GRBK', 'GRFS', 'GSHD', 'GTBIF', 'GTX',
    'GVA', 'HA', 'HBB', 'HBNC', 'HEES', 'HGV', 'HLNE', 'HLX', 'HMN', 'HMST',
    'HNI', 'HRMY', 'HSC', 'HTLD', 'HUBG', 'HURN', 'HWC', 'HWKN', 'HZNP', 'IAA',
    'IART', 'ICAD', 'ICFI', 'ICUI', 'IDYA', 'IEP', 'IGT', 'IIIN', 'IIIV', 'IMXI',
    'INGN', 'INMD', 'INST', 'INT', 'IOSP', 'IPAR', 'IRBT', 'ISBC', 'ISSC', 'ITRI',
    'IVA', 'JBSS', 'JBTX', 'JBT', 'JCOM', 'JJSF', 'JKHY', 'JNPR', 'JOE', 'JRVR',
    'JTPY', 'KALU', 'KAMN', 'KBAL', 'KELYA', 'KEQU', 'KFRC', 'KIDS', 'KLXE', 'KMDA',
    'KODK', 'KTOS', 'LAMR', 'LAWS', 'LBC', 'LDI', 'LFST', 'LGIH', 'LIVN', 'LKFN',
    'LLNW', 'LMAT', 'LNDC', 'LNTH', 'LOB', 'LOGI', 'LQDA', 'LUNA', 'LXRX', 'MATW',
    'MAXN', 'MBUU', 'MBWM', 'MCRI', 'MDRX', 'MEDS', 'MESA', 'MGEE', 'MGPI', 'MGRC',
    'MIDD', 'MLCO', 'MMSI', 'MNTV', 'MOD', 'MODV', 'MOGO', 'MORF', 'MORN', 'MRCY',
    'MRSN', 'MRUS', 'MSEX', 'MSGS', 'MTLS', 'MTX', 'NARI', 'NATR', 'NBEV', 'NBTB',
    'NCMI', 'NEO', 'NEOG', 'NGVC', 'NINE', 'NMIH', 'NMRK', 'NNBR', 'NOVN', 'NPTN',
    'NRDS', 'NSIT', 'NSTG', 'NTCT', 'NTRA', 'NUVA', 'NVCR', 'NVT', 'NVTR', 'NWPX',
    'NX', 'OABI', 'OAS', 'OCFC', 'OCGN', 'ODP', 'OFIX', 'OFLX', 'OGS', 'OMCL',
    'OMER', 'ONB', 'OPCH', 'OPI', 'ORBC', 'ORIC', 'OSG', 'OSUR', 'OTTR', 'ATRO',
    'OVBC', 'OVID', 'PACB', 'PAGS', 'PATI', 'PAYA', 'PAYS', 'PBCT', 'PBH', 'PBYI',
    'PCTY', 'PDCE', 'PDFS', 'PETQ', 'PFGC', 'PGEN', 'PGNY', 'PINC', 'PKE', 'PLAY',
    'PLBY', 'PLCE', 'PLUS', 'PMVP', 'PNRG', 'PNTG', 'PPBI', 'PPC', 'PRAA', 'PRMW',
    'PROS', 'PRSC', 'PRVB', 'PSFE', 'PSMT', 'PSN', 'PSTL', 'PTGX', 'PUBM', 'PXLW',
    'QDEL', 'QRTEA', 'QTRX', 'QTWO', 'QUIK', 'RAMP', 'RAPT', 'RDNT', 'RDUS', 'RDVT',
    'REGI', 'RELL', 'REPH', 'REPL', 'RETO', 'REVG', 'RGC', 'RGLD', 'RICK', 'RIGL',
    'RIVE', 'RNET', 'RNR', 'ROCC', 'ROCK', 'ROG', 'ROLL', 'RPAY', 'RPRX', 'RRX',
    'RSSS', 'RTLR', 'RTRX', 'RUBY', 'RUSHA', 'RUSHB', 'RUTH', 'RVMD', 'RVPH', 'RYAM',
    'SAIL', 'SAM', 'SANA', 'SANM', 'SBCF', 'SBFG', 'SBGI', 'SBRA', 'SCHL', 'SCHN',
    'SCOR', 'SCSC', 'SCWX', 'SDGR', 'SEAT', 'SENEA', 'SFBS', 'SFNC', 'SGMO', 'SGMS',
    'SHBI', 'SHEN', 'SHIP', 'SHOO', 'SHV', 'SIBN', 'SIG', 'SILC', 'SILK', 'SIM',
    'SITC', 'SJW', 'SKIN', 'SKWD', 'SLDB', 'SLP', 'SMBC', 'SMID', 'SMMT', 'SMPL',
    'SMSI', 'SMTX', 'SNCR', 'SNDX', 'SNV', 'SNWV', 'SONM', 'SP', 'SPCB', 'SPFI',
    'SPNE', 'SPNT', 'SPOK', 'SPRO', 'SPWH', 'SPXC', 'SRCE', 'SRDX', 'SREV', 'SRNE',
    'SSB', 'SSRM', 'SSTI', 'SSTK', 'STAG', 'STBA', 'STFC', 'STLD', 'STMP', 'STNG',
    'STOK', 'STRL', 'STRS', 'STXS', 'SUPN', 'SUSC', 'SVRA', 'SWAV', 'SWTX', 'SYBX',
    'SYBT', 'SYNC', 'SYNH', 'SYNL', 'TBBK', 'TBI', 'TCBI', 'TCBK', 'TCMD', 'TELL',
    'TEN', 'TERN', 'TESS', 'TFII', 'TGNA', 'TH', 'THRY', 'TILE', 'TITN', 'TLND',
    'TLYS', 'TMDX', 'TNAV', 'TNDM', 'TNXP', 'TOPS', 'TPHS', 'TPTX', 'TR', 'TRDA',
    'TRIB', 'TRHC', 'TRM', 'TRNO', 'TRS', 'TRUE', 'TRVN', 'TTGT', 'TTM', 'TWNK',
    'TXG', 'TXMD', 'UCBI', 'UEIC', 'UFCS', 'UFPT', 'UG', 'UHAL', 'UHT', 'UIHC',
    'ULH', 'UMBF', 'UNIT', 'UNTY', 'UPLD', 'URGN', 'USAK', 'USAP', 'USAU', 'USCR',
    'USIO', 'USNA', 'USPH', 'UTMD', 'VBF', 'VCRA', 'VEON', 'VERA', 'VERI', 'VERU',
    'VICR', 'VIE', 'VIEW', 'VINC', 'VIRC', 'VIRI', 'VIS', 'VITL', 'VIVO', 'VLDR',
    'VMEO', 'VNCE', 'VNDA', 'VNE', 'VNET', 'VOXX', 'VOYA', 'VRA', 'VRRM', 'VSEC',
    'VSTM', 'VTS', 'VTVT', 'WASH', 'WATT', 'WDAY', 'WDFC', 'WETF', 'WEYS', 'WHF',
    'WKSP', 'WLDN', 'WLK', 'WMK', 'WNEB', 'WOR', 'WPRT', 'WRBY', 'WSBF', 'WSC',
    'WSTG', 'WTRG', 'WVVI', 'WWD', 'WWW', 'XBIT', 'XELA', 'XNET', 'XOG', 'XOMA',
    'XONE', 'XPEL', 'XPER', 'YGTY', 'YMAB', 'YORW', 'YRCW', 'YSG', 'YY', 'ZBRA',
    'ZEAL', 'ZEUS', 'ZIMV', 'ZION', 'ZIXI', 'ZNTL', 'ZTO', 'ZVO', 'REXR', 'COLD',
    'IIPR', 'ADC', 'AHH', 'AIRC', 'APLE', 'BDN', 'BNL', 'BRX', 'BXP', 'CIO',
    'CLPR', 'CMCT', 'CTRE', 'CUBE', 'CUZ', 'DEA', 'DEI', 'DGRW', 'DOC', 'EGP',
    'ELME', 'EPR', 'ESRT', 'FAT', 'FCPT', 'FPI', 'FR', 'FSP', 'GNL', 'GOOD',
    'GPMT', 'GTY', 'HT', 'ILPT', 'INN', 'IRT', 'JBGS', 'KRC', 'LAND', 'LTC',
    'MAC', 'MDRR', 'MFA', 'MGP', 'MPW', 'NHI', 'NNN', 'NSA', 'NXRT', 'NYT',
    'OFC', 'OFFS', 'OHI', 'OUT', 'PGRE', 'PK', 'PLYM', 'QTS', 'RC', 'RLGT',
    'RLJ', 'RYN', 'SAFE', 'SKT', 'SLG', 'SNDE', 'SRC', 'STAR', 'STOR', 'SUI',
    'SVC', 'TRTX', 'UBFO', 'UBA', 'UE', 'VER', 'VNO', 'VRE', 'VSTA', 'WPC',
    'WRI', 'WTRE', 'XHR', 'QUBT', 'RKLB', 'LUNR', 'MNTS', 'SPCE', 'JOBY', 'ACHR',
    'CEVA', 'VEEV', 'FIVN', 'OPEN', 'RDFN', 'Z', 'ZG', 'CELH',
]


CATEGORIES: Dict[str, List[str]] = {
    'crypto': CRYPTO_SYMBOLS,
    'forex': FOREX_SYMBOLS,
    'futures': FUTURES_SYMBOLS,
    'sp500': SP500_SYMBOLS,
    'etf': ETF_SYMBOLS,
    'nasdaq': NASDAQ_ADDITIONAL,
}
