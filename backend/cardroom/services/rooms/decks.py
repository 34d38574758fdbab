"""Default deck contents, inserted by ``CardStore.ensure_seeded``."""

DEFAULT_PROMPTS = [
    "I merged into your lane without looking.",
    "I replied-all to a company-wide email to say thanks.",
    "I ate the last slice and left the empty box in the fridge.",
    "I spoiled the finale in the group chat.",
    "I reclined my seat all the way on a red-eye flight.",
    "I borrowed your charger and never gave it back.",
    "I took a phone call on speaker in the waiting room.",
    "I double-dipped at your party.",
    "I parked across two spaces outside the grocery store.",
    "I left one second on the microwave timer.",
    "I walked four abreast on a narrow sidewalk.",
    "I sent you a voice memo instead of a text.",
    "I used your good scissors to open a package.",
    "I put my wet umbrella on your chair.",
    "I watched the next episode without you.",
    "I stood right in front of the baggage carousel.",
    "I hummed the same song all afternoon.",
    "I microwaved fish in the office kitchen.",
    "I told you the movie was great and it was not.",
    "I returned your tupperware without the lid.",
    "I said 'per my last email'.",
    "I left a single dish soaking for three days.",
    "I asked to split the bill evenly after ordering the lobster.",
    "I took the armrest on both sides.",
    "I cancelled plans five minutes after we were supposed to meet.",
    "I clipped my nails on the train.",
    "I changed the thermostat without asking.",
    "I liked a photo of yours from six years ago.",
    "I tapped my pen through the entire meeting.",
    "I set seven alarms and slept through all of them.",
]

DEFAULT_RESPONSES = [
    "I hope your earbuds always die at the gym.",
    "I hope every cereal bowl you pour is mostly dust.",
    "I hope your phone autocorrects your name to something worse.",
    "I hope you always get the shopping cart with the squeaky wheel.",
    "I hope your toast always lands butter side down.",
    "I hope your socks are always slightly damp.",
    "I hope every password you pick is already in use.",
    "I hope your ice cream always has freezer burn.",
    "I hope your shoelaces come undone every few steps.",
    "I hope your printer only works when you don't need it.",
    "I hope your pillow is never cool on either side.",
    "I hope your Wi-Fi drops right before you hit send.",
    "I hope your sunglasses are always in the other bag.",
    "I hope your coffee is always just a little too hot, then suddenly cold.",
    "I hope every jar you open is stuck.",
    "I hope your headphones are always tangled.",
    "I hope your favorite song gets stuck at the worst part.",
    "I hope you always step on the one wet spot on the floor.",
    "I hope your keys are always in the last pocket you check.",
    "I hope your package is always delivered to the neighbor.",
    "I hope you bite into every cookie expecting chocolate and get raisins.",
    "I hope your umbrella flips inside out at every corner.",
    "I hope the elevator stops on every floor for you.",
    "I hope your phone hits one percent during every map search.",
    "I hope your fitted sheet never fits.",
    "I hope your tea bag string always falls into the cup.",
    "I hope you always get the slowest checkout line.",
    "I hope your car always needs gas when you're late.",
    "I hope the vending machine always eats your last coin.",
    "I hope you forget every word to the chorus at karaoke.",
    "I hope your pen always runs out mid-signature.",
    "I hope your sandwich always slides apart on the first bite.",
    "I hope your shower is always one degree off.",
    "I hope your remote batteries die during the opening credits.",
    "I hope your video call always freezes on a terrible face.",
    "I hope your straw always splits.",
    "I hope every pair of gloves you own is missing one.",
    "I hope your noodles always boil over.",
    "I hope your laptop updates right before your presentation.",
    "I hope your cat only sits on you when you have to leave.",
    "I hope your popcorn is always half kernels.",
    "I hope you always wake up a minute before your alarm.",
    "I hope your paper cuts are always on the knuckle.",
    "I hope the last chip in every bag is just crumbs.",
    "I hope your seat at every concert is behind a pillar.",
    "I hope your ceiling fan always clicks.",
    "I hope your wallet is always at home.",
    "I hope your ice cubes always stick together.",
    "I hope your toothpaste cap rolls under the sink.",
    "I hope your playlist shuffles to the same song twice.",
    "I hope your leftovers are always eaten by someone else.",
    "I hope your zipper always catches on the fabric.",
    "I hope your window seat always faces the wing.",
    "I hope your plants only bloom while you're on vacation.",
    "I hope every receipt you need has faded.",
    "I hope your bike always has a flat on Monday.",
    "I hope your hiccups start during every job interview.",
    "I hope your mirror always fogs right after you wipe it.",
    "I hope your pizza always arrives with the cheese slid to one side.",
    "I hope your pencil breaks every time you sharpen it.",
    "I hope every door you push says pull.",
    "I hope your new shoes squeak in quiet rooms.",
    "I hope your spellcheck always misses the one typo that matters.",
    "I hope your group project partner goes silent.",
    "I hope every sticker you peel leaves residue.",
    "I hope your soup is always too salty to finish.",
]
