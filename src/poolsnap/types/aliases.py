type BlockNumber = int
type ChainId = int
type Pip = int  # V3 pool fees are expressed in pips equaling one hundredth of 1%
